from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, HttpUrl

from ..consts import TIMEOUT_HTTP_REQUEST


class ConsoleChannelConfig(BaseModel):
    type: Literal["console"] = "console"
    enabled: bool = True


class FeishuChannelConfig(BaseModel):
    type: Literal["feishu"] = "feishu"
    enabled: bool = True

    webhook_url: HttpUrl
    timeout: int = Field(default=TIMEOUT_HTTP_REQUEST, ge=1)


NotificationChannelConfig = Annotated[
    Union[ConsoleChannelConfig, FeishuChannelConfig],
    Field(discriminator="type"),
]


class NotificationConfig(BaseModel):
    channels: list[NotificationChannelConfig] = Field(default_factory=list)

    @property
    def enabled_channels(self) -> list[NotificationChannelConfig]:
        return [channel for channel in self.channels if channel.enabled]
