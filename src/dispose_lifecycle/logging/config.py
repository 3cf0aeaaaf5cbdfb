# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle
"""
Configuration for the dispose-lifecycle logging system.

Settings are environment-driven through pydantic-settings. Levels are stored
as ``LogLevel`` members, whose values are the stdlib level numbers.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(IntEnum):
    """Log levels accepted by the package settings."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, value: Any) -> LogLevel:
        """Resolve a member or a case-insensitive level name.

        Raises:
            ValueError: For unknown names and for anything but names or members
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(
                f"Log level must be a level name, got {type(value).__name__}"
            )
        member = cls.__members__.get(value.strip().upper())
        if member is None:
            raise ValueError(f"Invalid log level: {value}")
        return member


class LoggingSettings(BaseSettings):
    """
    Configuration settings for the logging system.
    Loads from ``DISPOSE_LIFECYCLE_LOGGING_*`` environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="DISPOSE_LIFECYCLE_LOGGING_",
        extra="ignore",
        case_sensitive=False,
        frozen=False,
    )

    level: LogLevel | None = Field(
        default=None,
        description="Package logger level; unset defers to the host's loggers",
    )
    json_format: bool = Field(default=False, description="Enable JSON log format")
    include_timestamp: bool = Field(
        default=True, description="Include timestamp in logs"
    )
    include_level: bool = Field(default=True, description="Include log level in logs")
    console_enabled: bool = Field(
        default=False, description="Attach a stdout handler to package loggers"
    )
    file_enabled: bool = Field(default=False, description="Enable file logging")
    file_path: str | None = Field(default=None, description="Path to log file")

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: Any) -> LogLevel | None:
        if v is None or v == "":
            return None
        return LogLevel.parse(v)

    @classmethod
    def load(cls) -> LoggingSettings:
        """Load logging settings from environment variables or defaults."""
        return cls()
