from __future__ import annotations

from .base import Channel
from .config import (
    ConsoleChannelConfig,
    FeishuChannelConfig,
    NotificationChannelConfig,
    NotificationConfig,
)
from .dispatch import dispatch_alerts
from .factory import create_channel, create_message

__all__ = [
    "Channel",
    "ConsoleChannelConfig",
    "FeishuChannelConfig",
    "NotificationChannelConfig",
    "NotificationConfig",
    "create_channel",
    "create_message",
    "dispatch_alerts",
]
