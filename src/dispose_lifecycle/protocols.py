# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle
"""
Protocol definitions for disposal.

A type takes part in disposal by implementing one of these protocols; no
base class is required.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, TypeAlias, runtime_checkable


@runtime_checkable
class Disposable(Protocol):
    """Protocol for objects that release their resources synchronously."""

    def dispose(self) -> None:
        """Release all resources held by the object.

        Calling it more than once must have no further effect.
        """
        ...


@runtime_checkable
class AsyncDisposable(Protocol):
    """Protocol for objects that release their resources asynchronously."""

    async def dispose_async(self) -> None:
        """Release all resources held by the object."""
        ...


@runtime_checkable
class DisposableAware(Disposable, Protocol):
    """Disposable that can report whether it was disposed."""

    @property
    def was_disposed(self) -> bool:
        """True once disposal has been committed."""
        ...


@runtime_checkable
class AsyncDisposableAware(AsyncDisposable, Protocol):
    """Async disposable that can report whether it was disposed."""

    @property
    def was_disposed(self) -> bool:
        """True once disposal has been committed."""
        ...


DisposableItem: TypeAlias = Disposable | None
DisposableItems: TypeAlias = Iterable[DisposableItem] | None
AsyncDisposableItem: TypeAlias = Disposable | AsyncDisposable | None
