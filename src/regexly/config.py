"""Centralised application configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` directly for isolation.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from regexly.matching.flags import FlagSet
from regexly.rendering.markers import (
    DEFAULT_MARKER_CLASS,
    DEFAULT_MARKER_TAG,
    HighlightMarker,
)

logger = logging.getLogger(__name__)

# src/regexly/config.py  ->  parent x3  ->  project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class AppConfig(BaseModel):
    """Application runtime configuration."""

    host: str = "0.0.0.0"  # nosec B104
    port: int = 8080
    title: str = "Regexly"
    storage_secret: SecretStr = SecretStr("dev-secret-change-me")
    log_dir: Path = Path("logs")


class HighlightConfig(BaseModel):
    """Markup used to wrap matched spans."""

    marker_tag: str = DEFAULT_MARKER_TAG
    marker_class: str = DEFAULT_MARKER_CLASS

    @model_validator(mode="after")
    def marker_is_valid(self) -> HighlightConfig:
        # HighlightMarker raises ValueError for unusable names
        self.marker()
        return self

    def marker(self) -> HighlightMarker:
        return HighlightMarker(tag=self.marker_tag, css_class=self.marker_class)


class EditorConfig(BaseModel):
    """Tester defaults and limits."""

    default_flags: str = "g"
    max_text_length: int = 200_000

    @field_validator("default_flags")
    @classmethod
    def flags_are_known(cls, value: str) -> str:
        FlagSet.from_flag_string(value)
        return value

    @field_validator("max_text_length")
    @classmethod
    def limit_is_positive(cls, value: int) -> int:
        if value <= 0:
            msg = "EDITOR__MAX_TEXT_LENGTH must be positive"
            raise ValueError(msg)
        return value

    def initial_flags(self) -> FlagSet:
        return FlagSet.from_flag_string(self.default_flags)


class DevConfig(BaseModel):
    """Development toggles."""

    reload: bool = True
    show_browser: bool = False


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Application settings with automatic .env loading and type validation.

    Environment variables use double-underscore delimiter for nesting:
    ``APP__PORT``, ``HIGHLIGHT__MARKER_CLASS``, ``EDITOR__DEFAULT_FLAGS``, etc.
    """

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    app: AppConfig = AppConfig()
    highlight: HighlightConfig = HighlightConfig()
    editor: EditorConfig = EditorConfig()
    dev: DevConfig = DevConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()

    env_file = settings.model_config.get("env_file")
    if env_file is not None and Path(str(env_file)).is_file():
        logger.info("Settings loaded .env from: %s", env_file)
    else:
        logger.info("Settings: no .env file found, using env vars and defaults")

    return settings
