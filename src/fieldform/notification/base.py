from __future__ import annotations

from typing import Any, Protocol


class Channel(Protocol):
    """Delivery endpoint for rendered alerts.

    The payload type is channel specific: console channels take text, webhook
    channels take the decoded JSON body.
    """

    def send(self, payload: Any) -> None: ...
