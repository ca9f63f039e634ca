"""Configuration file loading and validation."""

import logging
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .consts import (
    AI_API_KEY_PLACEHOLDER,
    AI_BASE_URL_DEFAULT,
    AI_MODEL_DEFAULT,
    DATABASE_PATH,
    LOG_FILE_DEFAULT,
    TIMEOUT_AI_REQUEST,
)
from .errors import ConfigException
from .notification.config import NotificationConfig

logger = logging.getLogger(__name__)


class WebConfig(BaseModel):
    """Web service configuration."""

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)
    reload: bool = Field(default=False)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class AIConfig(BaseModel):
    """Chat completions API used for schema generation and submission reports."""

    api_key: str = ""
    base_url: str = Field(default=AI_BASE_URL_DEFAULT)
    model: str = Field(default=AI_MODEL_DEFAULT)
    temperature: float = Field(default=0.3, ge=0, le=2)
    max_tokens: int = Field(default=800, gt=0)
    timeout: int = Field(default=TIMEOUT_AI_REQUEST, ge=1)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid AI base_url: {v}. Expected an http(s) URL")
        return v.rstrip("/")

    @property
    def enabled(self) -> bool:
        return bool(self.api_key) and self.api_key != AI_API_KEY_PLACEHOLDER


class Config(BaseSettings):
    """Application configuration."""

    database_path: str = Field(default=DATABASE_PATH)
    log_file: str = Field(default=LOG_FILE_DEFAULT)

    web: WebConfig = Field(default_factory=WebConfig)
    ai: AIConfig = Field(default_factory=AIConfig)
    notification: NotificationConfig = Field(default_factory=NotificationConfig)

    model_config = SettingsConfigDict(
        env_prefix="FIELDFORM_",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> "Config":
        """Load configuration from specified path."""
        path = Path(config_path)
        if not path.exists():
            raise ConfigException(f"Configuration file not found: {config_path}")

        class _Config(cls):
            model_config = SettingsConfigDict(
                toml_file=str(path),
                env_prefix="FIELDFORM_",
                env_nested_delimiter="__",
            )

        try:
            return _Config()
        except ValidationError as e:
            error_lines = ["Configuration validation failed:"]
            for error in e.errors():
                loc = " -> ".join(str(item) for item in error["loc"])
                error_lines.append(f"  - {loc}: {error['msg']}")
            raise ConfigException("\n".join(error_lines)) from e
        except ValueError as e:
            raise ConfigException(f"Invalid configuration file {config_path}: {e}") from e

    @classmethod
    def load(cls, config_path: str | None) -> "Config":
        """Load from ``config_path`` when it exists, else from defaults and environment."""
        if config_path and Path(config_path).exists():
            return cls.load_from_file(config_path)

        logger.info(f"Configuration file not found ({config_path}), using defaults")
        try:
            return cls()
        except ValidationError as e:
            raise ConfigException(f"Configuration validation failed: {e}") from e
