# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle

"""
Public API for the dispose-lifecycle logging system.
"""

from __future__ import annotations

from dispose_lifecycle.logging.config import LoggingSettings, LogLevel
from dispose_lifecycle.logging.logger import (
    LifecycleLogger,
    StructuredFormatter,
    configure_logging,
    get_logger,
)

__all__ = [
    "LogLevel",
    "LifecycleLogger",
    "StructuredFormatter",
    "LoggingSettings",
    "configure_logging",
    "get_logger",
]
