from __future__ import annotations

from ..base import Channel
from .console import ConsoleChannel
from .feishu import FeishuChannel

__all__ = ["Channel", "ConsoleChannel", "FeishuChannel"]
