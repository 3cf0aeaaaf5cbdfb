# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle
"""
Base error classes for dispose-lifecycle.

This module provides the foundation for structured error handling with
error codes, severities, contextual information, and error categories.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any, Final

from dispose_lifecycle.errors.registry import registry


class ErrorSeverity(str, Enum):
    """Severity levels for errors."""

    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ErrorCategory:
    """Error category with hierarchical support."""

    def __init__(self, name: str, parent: ErrorCategory | None = None) -> None:
        """Initialize a new error category.

        Args:
            name: Unique identifier for this category
            parent: Optional parent category for hierarchical structure
        """
        self.name = name
        self.parent = parent

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"ErrorCategory({self.name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorCategory):
            return False
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def is_subcategory_of(self, category: ErrorCategory) -> bool:
        """Check if this category is the given category or one of its descendants."""
        current: ErrorCategory | None = self
        while current:
            if current == category:
                return True
            current = current.parent
        return False

    @classmethod
    def get_or_create(
        cls, name: str, parent: ErrorCategory | None = None
    ) -> ErrorCategory:
        """Get or create an error category."""
        return registry.get_category(name, parent)


INTERNAL: Final = ErrorCategory.get_or_create("INTERNAL")


class ErrorCode:
    """Error code associated with a category."""

    def __init__(
        self,
        code: str,
        category: ErrorCategory | None = None,
        parent: ErrorCode | None = None,
    ) -> None:
        """Initialize a new error code.

        Args:
            code: Unique identifier for this error code
            category: The category this error code belongs to
            parent: Optional parent error code for hierarchical structure
        """
        if category is None:
            category = registry.get_category("INTERNAL")

        self.code = code
        self.category = category
        self.parent = parent

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"ErrorCode({self.code!r}, category={self.category.name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorCode):
            return False
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    @classmethod
    def get_by_code(
        cls, code: str, *, raise_if_missing: bool = True
    ) -> ErrorCode | None:
        """Get an error code by its string representation."""
        error_code = registry.lookup_code(code)
        if error_code is None and raise_if_missing:
            raise ValueError(f"Error code '{code}' not found in registry")
        return error_code

    @classmethod
    def get_or_create(cls, name: str, category: ErrorCategory) -> ErrorCode:
        """Get or create an error code."""
        return registry.get_code(name, category.name)


INTERNAL_ERROR: Final = ErrorCode.get_or_create("INTERNAL_ERROR", INTERNAL)


class LifecycleError(Exception):
    """
    Base error class for dispose-lifecycle errors.
    Should only be subclassed for specific errors, not instantiated directly.
    """

    message: str
    code: ErrorCode
    category: ErrorCategory
    severity: ErrorSeverity
    context: dict[str, Any]
    timestamp: datetime

    def __new__(cls, *args: Any, **kwargs: Any) -> LifecycleError:
        if cls is LifecycleError:
            raise TypeError(
                "Do not instantiate LifecycleError directly; subclass it for specific errors."
            )
        return super().__new__(cls)

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize a new LifecycleError.

        Args:
            message: Human-readable error message
            code: ErrorCode object containing the code and category
            severity: Severity level of the error
            context: Additional contextual information
            **kwargs: Merged into the context
        """
        if not isinstance(code, ErrorCode):
            raise TypeError("code must be an ErrorCode instance, not a string")

        super().__init__(message)

        full_context = dict(context or {})
        full_context.update(kwargs)

        self.message = message
        self.code = code
        self.category = code.category
        self.severity = severity
        self.context = full_context
        self.timestamp = datetime.now(UTC)

    def add_context(self, key: str, value: Any) -> LifecycleError:
        """Add a key-value pair to the error context and return self for chaining."""
        self.context[key] = value
        return self

    def __str__(self) -> str:
        """Get string representation of the error.

        Returns:
            String in format 'code: message'
        """
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a dictionary representation of the error."""
        return {
            "code": self.code.code,
            "message": self.message,
            "category": self.category.name,
            "severity": self.severity.name,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }
