from __future__ import annotations


def alert_title(form_title: str, event_count: int) -> str:
    noun = "alert" if event_count == 1 else "alerts"
    return f"{form_title}: {event_count} threshold {noun}"
