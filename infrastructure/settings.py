"""Centralized application settings.

All runtime configuration is read here once, from the process environment
(optionally seeded from a ``.env`` file), and handed to the components as an
immutable :class:`AppSettings` snapshot.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

from dotenv import load_dotenv

from . import constants


def _to_bool(value: Optional[str], default: bool = False) -> bool:
    """Normalize environment strings such as "true"/"1" into booleans."""

    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _to_int(value: Optional[str], default: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def _to_float(value: Optional[str], default: float) -> float:
    try:
        parsed = float(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


@dataclass(frozen=True)
class AppSettings:
    """Immutable snapshot of high-level configuration values."""

    production_mode: bool
    timezone: str
    api_base_url: str
    organization_id: int
    http_timeout_seconds: float
    data_directory: str
    log_directory: str
    telegram_bot_token: Optional[str]
    telegram_chat_id: Optional[str]

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)


def load_settings(env: Optional[Mapping[str, str]] = None) -> AppSettings:
    """Load configuration from the environment and fall back to defaults."""

    if env is None:
        load_dotenv(override=False)
        env = os.environ

    production_mode = _to_bool(env.get("PRODUCTION_MODE"), default=False)
    timezone = env.get("BOT_TIMEZONE") or constants.FACILITY_TIMEZONE
    api_base_url = env.get("APPOINTLET_API_URL") or constants.APPOINTLET_API_URL
    organization_id = _to_int(
        env.get("APPOINTLET_ORGANIZATION"), constants.ORGANIZATION_ID
    )
    http_timeout_seconds = _to_float(
        env.get("HTTP_TIMEOUT_SECONDS"), constants.HTTP_TIMEOUT_SECONDS
    )

    data_directory = env.get("DATA_DIRECTORY") or "data"
    log_directory = env.get("LOG_DIRECTORY") or os.path.join("logs", "latest_log")

    telegram_bot_token = env.get("TELEGRAM_BOT_TOKEN") or None
    telegram_chat_id = env.get("TELEGRAM_CHAT_ID") or None

    return AppSettings(
        production_mode=production_mode,
        timezone=timezone,
        api_base_url=api_base_url.rstrip("/"),
        organization_id=organization_id,
        http_timeout_seconds=http_timeout_seconds,
        data_directory=data_directory,
        log_directory=log_directory,
        telegram_bot_token=telegram_bot_token,
        telegram_chat_id=telegram_chat_id,
    )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached :class:`AppSettings` instance."""

    return load_settings()
