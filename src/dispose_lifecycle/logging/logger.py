# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle
"""
Logger implementation for dispose-lifecycle.

This module provides the package logger based on Python's standard logging
module, enhanced with structured context.
"""

from __future__ import annotations

import datetime
import enum
import json
import logging
import sys
import threading
import uuid
from logging import StreamHandler
from typing import Any

from dispose_lifecycle.logging.config import LoggingSettings, LogLevel

PACKAGE_LOGGER_NAME = "dispose_lifecycle"

# Attribute on LogRecord that carries structured context
CONTEXT_ATTR = "lifecycle_context"

_configure_lock = threading.Lock()
_configured = False


class StructuredFormatter(logging.Formatter):
    """Formatter that supports structured logging with context data."""

    def __init__(
        self,
        json_format: bool = False,
        include_timestamp: bool = True,
        include_level: bool = True,
    ) -> None:
        """Initialize a structured formatter.

        Args:
            json_format: Whether to format logs as JSON
            include_timestamp: Whether to include timestamps in logs
            include_level: Whether to include log level in logs
        """
        self.json_format = json_format
        self.include_timestamp = include_timestamp
        self.include_level = include_level

        fmt = "%(message)s"
        if include_timestamp:
            fmt = "%(asctime)s " + fmt
        if include_level and not json_format:
            fmt = fmt + " [%(levelname)s]"

        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with its structured context."""
        extra: dict[str, Any] = dict(getattr(record, CONTEXT_ATTR, None) or {})

        if self.json_format:
            return self._format_json(record, extra)
        message = super().format(record)
        return self._format_text(message, extra)

    def _format_json(self, record: logging.LogRecord, extra: dict[str, Any]) -> str:
        log_data: dict[str, Any] = {
            "message": record.getMessage(),
            "logger": record.name,
            **extra,
        }

        if self.include_level:
            log_data["level"] = record.levelname

        if self.include_timestamp:
            log_data["timestamp"] = self.formatTime(record, self.datefmt)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
            log_data["error"] = str(record.exc_info[1])

        return json.dumps(log_data, cls=LifecycleJsonEncoder, ensure_ascii=False)

    def _format_text(self, message: str, extra: dict[str, Any]) -> str:
        if not extra:
            return message

        ctx_str = " ".join(f"{k}={self._format_value(v)}" for k, v in extra.items())
        return f"{message} {ctx_str}"

    def _format_value(self, value: Any) -> str:
        """Format a value for text output."""
        if isinstance(value, str):
            if " " in value:
                return f'"{value}"'
            return value
        if isinstance(value, datetime.datetime | datetime.date):
            return value.isoformat()
        if isinstance(value, uuid.UUID):
            return str(value)
        if isinstance(value, enum.Enum):
            return value.name
        if isinstance(value, BaseException):
            return f'"{type(value).__name__}: {value}"'
        try:
            return json.dumps(value, cls=LifecycleJsonEncoder)
        except (TypeError, ValueError):
            return str(value)


class LifecycleJsonEncoder(json.JSONEncoder):
    """JSON encoder with string fallbacks for values that are not serializable."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (datetime.datetime, datetime.date)):
            return obj.isoformat()
        if isinstance(obj, uuid.UUID):
            return str(obj)
        if isinstance(obj, enum.Enum):
            return obj.value
        if hasattr(obj, "model_dump"):
            return obj.model_dump()
        if isinstance(obj, BaseException):
            return f"{type(obj).__name__}: {obj}"
        return str(obj)


def configure_logging(
    settings: LoggingSettings | None = None, *, force: bool = False
) -> logging.Logger:
    """Configure the package logger from settings.

    Runs once per process unless ``force`` is set. The package logger keeps
    level NOTSET, deferring to the host's configuration, unless a level is
    set. Records always propagate so host applications control final output.

    Args:
        settings: Logging settings (loads from environment if None)
        force: Reconfigure even if already configured

    Returns:
        The package root logger
    """
    global _configured

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    with _configure_lock:
        if _configured and not force:
            return package_logger

        settings = settings or LoggingSettings.load()
        package_logger.setLevel(
            logging.NOTSET if settings.level is None else int(settings.level)
        )

        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()

        formatter = StructuredFormatter(
            json_format=settings.json_format,
            include_timestamp=settings.include_timestamp,
            include_level=settings.include_level,
        )

        if settings.console_enabled:
            console = StreamHandler(sys.stdout)
            console.setFormatter(formatter)
            console.setLevel(logging.NOTSET)
            package_logger.addHandler(console)

        if settings.file_enabled and settings.file_path:
            file_handler = logging.FileHandler(settings.file_path)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)

        if not package_logger.handlers:
            package_logger.addHandler(logging.NullHandler())

        package_logger.propagate = True
        _configured = True
        return package_logger


class LifecycleLogger:
    """Structured logger for dispose-lifecycle modules.

    Context passed as keyword arguments, plus any bound context, travels on
    the record under ``lifecycle_context``.
    """

    def __init__(
        self,
        name: str,
        level: LogLevel | None = None,
        bound_context: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize a new logger.

        Args:
            name: Logger name, normally a module ``__name__``
            level: Optional level for this logger only; otherwise inherited
            bound_context: Context attached to every record
        """
        self.name = name
        self._logger = logging.getLogger(name)
        self._bound_context: dict[str, Any] = dict(bound_context or {})
        if level is not None:
            self.set_level(level)

    @property
    def stdlib_logger(self) -> logging.Logger:
        return self._logger

    def set_level(self, level: LogLevel) -> None:
        self._logger.setLevel(int(level))

    def is_enabled_for(self, level: LogLevel) -> bool:
        return self._logger.isEnabledFor(int(level))

    def log(
        self,
        level: int,
        msg: str,
        *,
        exc_info: Any = None,
        stacklevel: int = 1,
        **kwargs: Any,
    ) -> None:
        """Log a message with the given stdlib level and context.

        ``stacklevel`` counts from the caller of this method, as in
        ``logging.Logger.log``.
        """
        if not self._logger.isEnabledFor(level):
            return
        context = {**self._bound_context, **kwargs}
        self._logger.log(
            level,
            msg,
            exc_info=exc_info,
            extra={CONTEXT_ATTR: context},
            stacklevel=stacklevel + 1,
        )

    def debug(self, msg: str, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, stacklevel=2, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, stacklevel=2, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, stacklevel=2, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, stacklevel=2, **kwargs)

    def critical(self, msg: str, **kwargs: Any) -> None:
        self.log(logging.CRITICAL, msg, stacklevel=2, **kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log an error message with the active exception's traceback."""
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, msg, stacklevel=2, **kwargs)

    def bind(self, **kwargs: Any) -> LifecycleLogger:
        """Create a new logger with bound context values.

        Args:
            **kwargs: Context values to bind

        Returns:
            New logger instance sharing the underlying stdlib logger
        """
        return LifecycleLogger(
            self.name, bound_context={**self._bound_context, **kwargs}
        )


def get_logger(name: str, level: LogLevel | None = None) -> LifecycleLogger:
    """Get a logger for the specified name.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override

    Returns:
        Configured logger instance
    """
    configure_logging()
    return LifecycleLogger(name, level=level)
