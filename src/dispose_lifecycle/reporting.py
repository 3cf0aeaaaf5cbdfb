# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle
"""
Reporters for failures trapped during disposal.

Trapping helpers never drop a failure silently; they hand it to a reporter.
Callers may pass their own, otherwise ``get_default_reporter()`` decides from
``DisposalSettings``.
"""

from __future__ import annotations

from typing import Any, Protocol

from dispose_lifecycle.config import get_settings
from dispose_lifecycle.logging import LifecycleLogger, LogLevel, get_logger

logger = get_logger(__name__)


class DisposalReporter(Protocol):
    """Receives an item whose disposal raised, and the exception it raised."""

    def __call__(self, item: Any, error: BaseException) -> None: ...


class LoggingReporter:
    """Reports trapped failures through the package logger."""

    def __init__(
        self,
        level: LogLevel = LogLevel.ERROR,
        log: LifecycleLogger | None = None,
    ) -> None:
        self.level = level
        self._log = log or logger

    def __call__(self, item: Any, error: BaseException) -> None:
        self._log.log(
            int(self.level),
            f"Error during disposal of {type(item).__name__}: {error}",
            exc_info=(type(error), error, error.__traceback__),
            item_type=type(item).__name__,
            error_type=type(error).__name__,
        )


def null_reporter(item: Any, error: BaseException) -> None:
    """Discard the report."""


def get_default_reporter() -> DisposalReporter:
    """Return the reporter configured by ``DisposalSettings``."""
    settings = get_settings()
    if not settings.report_failures:
        return null_reporter
    return LoggingReporter(settings.report_level)


def report_failure(
    reporter: DisposalReporter | None, item: Any, error: BaseException
) -> None:
    """Hand a trapped failure to ``reporter`` (or the default one).

    A reporter that raises must not undo the trapping, so its own error is
    logged and dropped.
    """
    target = reporter if reporter is not None else get_default_reporter()
    try:
        target(item, error)
    except Exception as reporter_error:
        logger.exception(
            "Disposal reporter failed",
            item_type=type(item).__name__,
            reporter_error=reporter_error,
        )
