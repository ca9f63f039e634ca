from __future__ import annotations

from typing import Sequence

from ..errors import FieldFormException
from ..schema import NotificationEvent
from .channels import ConsoleChannel, FeishuChannel
from .config import NotificationChannelConfig
from .messages import AlertMessage, ConsoleAlertMessage, FeishuAlertMessage


def create_channel(
    config: NotificationChannelConfig,
) -> ConsoleChannel | FeishuChannel:
    match config.type:
        case "console":
            return ConsoleChannel()
        case "feishu":
            return FeishuChannel(
                webhook_url=str(config.webhook_url),
                timeout=config.timeout,
            )
        case _:
            raise FieldFormException(f"Unknown notification channel type: {config.type}")


def create_message(
    config: NotificationChannelConfig,
    channel: ConsoleChannel | FeishuChannel,
    form_title: str,
    events: Sequence[NotificationEvent],
    submission_id: int | None = None,
    submitted_by: str | None = None,
) -> AlertMessage:
    match config.type:
        case "console":
            message_cls = ConsoleAlertMessage
        case "feishu":
            message_cls = FeishuAlertMessage
        case _:
            raise FieldFormException(f"Unknown notification channel type: {config.type}")

    return message_cls(
        channel,
        form_title=form_title,
        events=events,
        submission_id=submission_id,
        submitted_by=submitted_by,
    )
