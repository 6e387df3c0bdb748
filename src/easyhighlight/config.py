"""Centralised configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` or the sub-models
directly for isolation.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# src/easyhighlight/config.py  ->  parent x3  ->  project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

DEFAULT_HIGHLIGHT_COLOR = "#fdff322f"

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6,8}$")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class HighlightConfig(BaseModel):
    """Behaviour of the highlight engine.

    Attributes:
        default_color: Color used when a highlight is added without one.
        key_scheme: Range key format, see ``easyhighlight.keys``.
        keep_collapsed: Keep highlights whose text was deleted as zero-width
            ranges instead of removing them.
        strict: Reject reversed ranges and change events with
            ``InvalidRangeError`` / ``InvalidChangeError``. When off, they
            are normalized by swapping the endpoints.
    """

    default_color: str = DEFAULT_HIGHLIGHT_COLOR
    key_scheme: Literal["concat", "delimited"] = "concat"
    keep_collapsed: bool = False
    strict: bool = True

    @field_validator("default_color")
    @classmethod
    def _check_hex_color(cls, value: str) -> str:
        if not _HEX_COLOR.match(value):
            msg = f"default_color must be #rrggbb or #rrggbbaa, got {value!r}"
            raise ValueError(msg)
        return value


class LoggingConfig(BaseModel):
    """Logging setup used by ``easyhighlight.setup_logging``."""

    level: str = "INFO"
    log_dir: Path | None = None

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}"
            raise ValueError(msg)
        return level


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Settings with automatic .env loading and type validation.

    Environment variables use double-underscore delimiter for nesting:
    ``HIGHLIGHT__DEFAULT_COLOR``, ``HIGHLIGHT__KEY_SCHEME``,
    ``LOG__LEVEL``, etc.
    """

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    highlight: HighlightConfig = HighlightConfig()
    log: LoggingConfig = LoggingConfig()


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
