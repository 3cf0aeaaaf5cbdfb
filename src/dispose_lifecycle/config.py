# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle
"""Disposal settings loading and caching.

Settings come from ``DISPOSE_LIFECYCLE_*`` environment variables and are
cached for the process. Tests and hosts that change the environment call
``clear_settings_cache()``.
"""

from __future__ import annotations

import threading
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dispose_lifecycle.logging.config import LogLevel


class DisposalSettings(BaseSettings):
    """Settings for the bulk and deferred disposal helpers."""

    model_config = SettingsConfigDict(
        env_prefix="DISPOSE_LIFECYCLE_",
        extra="ignore",
        case_sensitive=False,
        validate_assignment=True,
    )

    deferred_delay_ms: int = Field(
        default=0,
        ge=0,
        description="Default delay before deferred disposal runs",
    )
    report_failures: bool = Field(
        default=True,
        description="Log failures trapped during disposal",
    )
    report_level: LogLevel = Field(
        default=LogLevel.ERROR,
        description="Level at which trapped failures are logged",
    )

    @field_validator("report_level", mode="before")
    @classmethod
    def validate_report_level(cls, v: Any) -> LogLevel:
        return LogLevel.parse(v)

    @classmethod
    def load(cls) -> DisposalSettings:
        """Load settings from environment variables or defaults."""
        return cls()


_SETTINGS_CACHE: dict[type, DisposalSettings] = {}
_SETTINGS_LOCK = threading.Lock()


def get_settings() -> DisposalSettings:
    """Get the cached disposal settings, loading them on first use."""
    settings = _SETTINGS_CACHE.get(DisposalSettings)
    if settings is not None:
        return settings

    with _SETTINGS_LOCK:
        # Check again in case another thread loaded it while we were waiting
        settings = _SETTINGS_CACHE.get(DisposalSettings)
        if settings is None:
            settings = DisposalSettings.load()
            _SETTINGS_CACHE[DisposalSettings] = settings
        return settings


def clear_settings_cache() -> None:
    """Clear the cached settings so the next access reloads the environment."""
    with _SETTINGS_LOCK:
        _SETTINGS_CACHE.clear()
