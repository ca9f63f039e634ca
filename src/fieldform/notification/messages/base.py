from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

from ...schema import NotificationEvent
from ..base import Channel
from ..utils import alert_title

logger = logging.getLogger(__name__)


class AlertMessage(ABC):
    """Threshold alerts raised by one submission, rendered for one channel."""

    def __init__(
        self,
        channel: Channel,
        form_title: str,
        events: Sequence[NotificationEvent],
        submission_id: int | None = None,
        submitted_by: str | None = None,
    ) -> None:
        self._channel = channel
        self.form_title = form_title
        self.events = list(events)
        self.submission_id = submission_id
        self.submitted_by = submitted_by

    @property
    def title(self) -> str:
        return alert_title(self.form_title, len(self.events))

    def metadata(self) -> list[tuple[str, str]]:
        """Label/value pairs identifying the submission, when known."""
        items = []
        if self.submission_id is not None:
            items.append(("Submission", f"#{self.submission_id}"))
        if self.submitted_by:
            items.append(("Submitted by", self.submitted_by))
        return items

    def get_channel(self) -> Channel:
        return self._channel

    @abstractmethod
    def get_payload(self) -> Any: ...

    def send(self, fail_silently: bool = True) -> bool:
        try:
            self.get_channel().send(self.get_payload())
            return True
        except Exception as e:
            logger.warning(
                "Could not deliver '%s' for submission %s via %s: %s",
                self.title,
                self.submission_id if self.submission_id is not None else "-",
                type(self._channel).__name__,
                e,
            )
            if not fail_silently:
                raise
            return False
