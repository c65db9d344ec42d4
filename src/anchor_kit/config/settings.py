"""Process-level runtime settings read from the environment."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "ANCHOR_KIT_"

_DEVELOPMENT_ENVS = {"development", "dev", "local"}


class LogFormat(str, Enum):
    """Output formats supported by the log handler."""

    JSON = "json"
    TEXT = "text"


class RuntimeSettings(BaseSettings):
    """Deployment environment and logging knobs.

    These are not part of the anchor configuration itself; they describe the
    process the configuration is loaded into (``ANCHOR_KIT_ENV``,
    ``ANCHOR_KIT_LOG_LEVEL``, ``ANCHOR_KIT_LOG_FORMAT``).
    """

    env: str = Field(default="production")
    log_level: str = Field(default="INFO")
    log_format: LogFormat = Field(default=LogFormat.JSON)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("env", "log_level", mode="before")
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def is_development(self) -> bool:
        return self.env.lower() in _DEVELOPMENT_ENVS


@lru_cache(maxsize=1)
def get_runtime_settings() -> RuntimeSettings:
    """Create a cached runtime settings object."""

    return RuntimeSettings()


__all__ = ["ENV_PREFIX", "LogFormat", "RuntimeSettings", "get_runtime_settings"]
