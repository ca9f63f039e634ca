from __future__ import annotations

import logging
from typing import Sequence

from ..schema import NotificationEvent
from .config import NotificationConfig
from .factory import create_channel, create_message

logger = logging.getLogger(__name__)


def dispatch_alerts(
    config: NotificationConfig,
    form_title: str,
    events: Sequence[NotificationEvent],
    submission_id: int | None = None,
    submitted_by: str | None = None,
) -> int:
    """Send threshold alerts to every enabled channel.

    Returns the number of channels that accepted the message. Channel
    failures are logged and never propagate.
    """
    if not events:
        return 0

    delivered = 0
    for channel_config in config.enabled_channels:
        channel = create_channel(channel_config)
        message = create_message(
            channel_config,
            channel,
            form_title=form_title,
            events=events,
            submission_id=submission_id,
            submitted_by=submitted_by,
        )
        if message.send(fail_silently=True):
            delivered += 1

    logger.info(
        f"Dispatched {len(events)} threshold alert(s) for '{form_title}' "
        f"to {delivered}/{len(config.enabled_channels)} channel(s)"
    )
    return delivered
