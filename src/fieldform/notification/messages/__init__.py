from __future__ import annotations

from .base import AlertMessage
from .console import ConsoleAlertMessage
from .feishu import FeishuAlertMessage

__all__ = ["AlertMessage", "ConsoleAlertMessage", "FeishuAlertMessage"]
