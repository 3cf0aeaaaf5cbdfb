# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle
"""
Adapters that bring foreign resources under the ``Disposable`` contract.

Files, sockets, executors and context managers release resources under other
names. Wrap them here, at the boundary, instead of teaching the disposal
helpers about every method name.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from dispose_lifecycle.base import DisposableBase
from dispose_lifecycle.protocols import Disposable
from dispose_lifecycle.state import Finalizer

T = TypeVar("T")


class DisposableAdapter(DisposableBase, Generic[T]):
    """Disposable wrapper that calls ``release`` exactly once."""

    def __init__(
        self,
        target: T,
        release: Callable[[], Any],
        finalizer: Finalizer | None = None,
    ) -> None:
        """
        Args:
            target: The wrapped resource
            release: Zero-argument callable that frees ``target``
            finalizer: Optional callback run after ``release``
        """
        super().__init__(finalizer)
        self._target = target
        self._release: Callable[[], Any] | None = release

    @property
    def target(self) -> T:
        """The wrapped resource. Raises once the adapter is disposed."""
        self.assert_is_alive()
        return self._target

    def _on_dispose(self) -> None:
        release, self._release = self._release, None
        if release is not None:
            release()

    def __repr__(self) -> str:
        return f"DisposableAdapter({type(self._target).__name__}, state={self.dispose_state.name})"


def as_disposable(value: Any, method: str = "close") -> Disposable:
    """Return ``value`` as a ``Disposable``.

    Values that already implement ``Disposable`` are returned unchanged.
    Otherwise the bound ``method`` (``close`` by default) is wrapped, and
    failing that a context manager is wrapped so disposal calls
    ``__exit__(None, None, None)``.

    Raises:
        TypeError: If ``value`` offers none of these
    """
    if isinstance(value, Disposable):
        return value

    release = getattr(value, method, None)
    if callable(release):
        return DisposableAdapter(value, release)

    exit_ = getattr(value, "__exit__", None)
    if callable(exit_):
        return DisposableAdapter(value, lambda: exit_(None, None, None))

    raise TypeError(
        f"{type(value).__name__} has no dispose(), {method}() or __exit__() to adapt"
    )
