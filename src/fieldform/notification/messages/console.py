from __future__ import annotations

from .base import AlertMessage


class ConsoleAlertMessage(AlertMessage):
    def get_payload(self) -> str:
        lines = [self.title, ""]
        metadata = self.metadata()
        if metadata:
            lines.extend(f"{label}: {value}" for label, value in metadata)
            lines.append("")
        lines.extend(f"• {event.message}" for event in self.events)
        return "\n".join(lines)
