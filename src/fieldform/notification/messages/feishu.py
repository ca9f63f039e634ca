from __future__ import annotations

import logging
from typing import Any

from .base import AlertMessage

logger = logging.getLogger(__name__)


class FeishuAlertMessage(AlertMessage):
    def get_payload(self) -> dict[str, Any]:
        card = {
            "msg_type": "interactive",
            "card": {
                "header": {
                    "title": {"tag": "plain_text", "content": self.title},
                    "template": "red",
                },
                "elements": self._build_elements(),
            },
        }
        logger.debug("Prepared Feishu card for %s", self.title)
        return card

    def _build_elements(self) -> list[dict[str, Any]]:
        elements: list[dict[str, Any]] = []

        metadata = self.metadata()
        if metadata:
            content = "\n".join(f"**{label}:** {value}" for label, value in metadata)
            elements.append({"tag": "markdown", "content": content})
            elements.append({"tag": "hr"})

        lines = [f"- {event.message}" for event in self.events]
        elements.append({"tag": "markdown", "content": "\n".join(lines)})
        return elements
