# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle
"""
Error classes for the disposal lifecycle.

This module defines the DISPOSAL error category, its codes, and the errors
raised when a disposed object is used, when the disposal record is mutated
illegally, when a bulk disposal fails, or when deferred disposal has no
event loop to run on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from dispose_lifecycle.errors.base import (
    ErrorCategory,
    ErrorCode,
    ErrorSeverity,
    LifecycleError,
)

if TYPE_CHECKING:
    from dispose_lifecycle.protocols import DisposableAware

DISPOSAL: Final = ErrorCategory.get_or_create("DISPOSAL")
OBJECT_DISPOSED: Final = ErrorCode.get_or_create("OBJECT_DISPOSED", DISPOSAL)
DISPOSAL_STATE: Final = ErrorCode.get_or_create("DISPOSAL_STATE", DISPOSAL)
DISPOSAL_FAILED: Final = ErrorCode.get_or_create("DISPOSAL_FAILED", DISPOSAL)
NO_EVENT_LOOP: Final = ErrorCode.get_or_create("NO_EVENT_LOOP", DISPOSAL)


class ObjectDisposedError(LifecycleError):
    """Raised when an operation is attempted on an object that was disposed."""

    def __init__(
        self,
        object_name: str,
        message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        **kwargs: Any,
    ) -> None:
        """Initialize an object-disposed error.

        Args:
            object_name: Name identifying the disposed object, usually its type name
            message: Optional message; a default naming the object is used otherwise
            severity: How severe this error is
            **kwargs: Additional context keys
        """
        if message is None:
            message = f"Object '{object_name}' has been disposed and cannot be used."
        super().__init__(
            message,
            code=OBJECT_DISPOSED,
            severity=severity,
            object_name=object_name,
            **kwargs,
        )
        self.object_name = object_name

    @staticmethod
    def raise_if_disposed(
        disposable: DisposableAware,
        object_name: str,
        message: str | None = None,
    ) -> bool:
        """Raise if ``disposable`` reports itself as disposed.

        Args:
            disposable: Any object exposing ``was_disposed``
            object_name: Name to carry on the raised error
            message: Optional custom message

        Returns:
            True when the object is still usable

        Raises:
            ObjectDisposedError: If ``disposable.was_disposed`` is true
        """
        if disposable.was_disposed:
            raise ObjectDisposedError(object_name, message)
        return True


class DisposalStateError(LifecycleError):
    """Raised on an illegal change to an object's disposal record."""

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.CRITICAL,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code=DISPOSAL_STATE, severity=severity, **kwargs)


class DisposalError(LifecycleError):
    """Raised when disposing an item of a bulk asynchronous disposal fails."""

    def __init__(
        self,
        message: str,
        item: Any = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            code=DISPOSAL_FAILED,
            severity=severity,
            item_type=type(item).__name__ if item is not None else None,
            **kwargs,
        )
        self.item = item

    @classmethod
    def wrap(cls, exception: BaseException, item: Any = None) -> DisposalError:
        """Wrap a failure raised by an item's disposal.

        The original exception is chained as ``__cause__``.
        """
        error = cls(
            f"Failed to dispose {type(item).__name__}: {exception}",
            item=item,
            original_type=type(exception).__name__,
        )
        error.__cause__ = exception
        return error


class DeferredDisposalError(LifecycleError):
    """Raised when deferred disposal is requested outside a running event loop."""

    def __init__(
        self,
        message: str = "Deferred disposal needs a running asyncio event loop",
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code=NO_EVENT_LOOP, severity=severity, **kwargs)
