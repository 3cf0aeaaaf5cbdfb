# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle
"""
Disposal state machine.

Every disposable object walks ``ALIVE -> DISPOSE_CALLED -> DISPOSING ->
DISPOSED`` exactly once and never backwards. ``DisposableStateBase`` owns the
walk; the templates in ``dispose_lifecycle.base`` drive it.

The guard in ``_start_dispose`` holds under single-threaded reentrancy and
cooperative (asyncio) interleaving. It is not a lock: callers that share an
instance across threads must serialize disposal themselves.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum
from typing import Any

from dispose_lifecycle.errors import DisposalStateError, ObjectDisposedError
from dispose_lifecycle.logging import get_logger

logger = get_logger(__name__)

Finalizer = Callable[[], Any]


class DisposeState(IntEnum):
    """Disposal lifecycle states, in the only order they may be visited."""

    ALIVE = 0
    DISPOSE_CALLED = 1
    DISPOSING = 2
    DISPOSED = 3


class _DisposeRecord:
    """Per-instance disposal state and pending finalizer.

    The record only moves forward. Reaching ``DISPOSED`` seals it and any
    later assignment raises ``DisposalStateError``.
    """

    __slots__ = ("state", "finalizer", "frozen")

    state: DisposeState
    finalizer: Finalizer | None
    frozen: bool

    def __init__(self, finalizer: Finalizer | None = None) -> None:
        object.__setattr__(self, "frozen", False)
        object.__setattr__(self, "state", DisposeState.ALIVE)
        object.__setattr__(self, "finalizer", finalizer)

    def __setattr__(self, name: str, value: Any) -> None:
        if self.frozen:
            raise DisposalStateError(
                f"Disposal record is sealed; cannot set '{name}'",
                attribute=name,
            )
        if name == "state" and value < self.state:
            raise DisposalStateError(
                f"Disposal state cannot move from {self.state.name} back to "
                f"{DisposeState(value).name}",
                current_state=self.state.name,
                requested_state=DisposeState(value).name,
            )
        object.__setattr__(self, name, value)

    def advance(self, target: DisposeState) -> None:
        if target == self.state:
            return
        self.state = target
        if target == DisposeState.DISPOSED:
            self.frozen = True

    def take_finalizer(self) -> Finalizer | None:
        finalizer = self.finalizer
        if finalizer is not None:
            self.finalizer = None
        return finalizer


class DisposableStateBase:
    """
    Base class for objects that track their own disposal state.

    Subclass this (usually through ``DisposableBase`` or
    ``AsyncDisposableBase``); it cannot be instantiated directly.
    """

    def __new__(cls, *args: Any, **kwargs: Any) -> DisposableStateBase:
        if cls is DisposableStateBase:
            raise TypeError(
                "Do not instantiate DisposableStateBase directly; subclass it."
            )
        return super().__new__(cls)

    def __init__(self, finalizer: Finalizer | None = None) -> None:
        """
        Args:
            finalizer: Optional callback run once, after disposal completes
        """
        self._dispose_record = _DisposeRecord(finalizer)

    @property
    def dispose_state(self) -> DisposeState:
        """Current disposal state."""
        return self._dispose_record.state

    @property
    def was_disposed(self) -> bool:
        """True if the object is disposing or disposed.

        ``DISPOSE_CALLED`` still counts as not disposed: the request was
        accepted but teardown has not been committed.
        """
        return self._dispose_record.state >= DisposeState.DISPOSING

    def assert_is_alive(self, strict: bool = False) -> bool:
        """Raise ``ObjectDisposedError`` unless the object may still be used.

        Args:
            strict: Also reject ``DISPOSE_CALLED``; only ``ALIVE`` passes

        Returns:
            True when the check passes

        Raises:
            ObjectDisposedError: Carrying this instance's type name
        """
        if strict:
            failed = self._dispose_record.state != DisposeState.ALIVE
        else:
            failed = self.was_disposed
        if failed:
            raise ObjectDisposedError(type(self).__name__)
        return True

    def _on_before_dispose(self) -> None:
        """Hook run while the state is ``DISPOSE_CALLED``. No-op by default."""

    def _start_dispose(self) -> bool:
        """Enter disposal. Returns False if disposal already started.

        Exceptions from ``_on_before_dispose`` propagate, but only after the
        state has moved on to ``DISPOSING``.
        """
        record = self._dispose_record
        if record.state != DisposeState.ALIVE:
            return False

        record.advance(DisposeState.DISPOSE_CALLED)
        logger.debug("Dispose called", object_type=type(self).__name__)

        try:
            self._on_before_dispose()
        finally:
            # The hook may have finished disposal itself; never regress.
            if record.state == DisposeState.DISPOSE_CALLED:
                record.advance(DisposeState.DISPOSING)

        return True

    def _finish_dispose(self) -> None:
        """Complete disposal and run the finalizer.

        The state is ``DISPOSED`` and sealed before the finalizer runs, so a
        finalizer calling back into the object sees it as disposed.
        """
        record = self._dispose_record
        if record.state == DisposeState.DISPOSED:
            return

        finalizer = record.take_finalizer()
        record.advance(DisposeState.DISPOSED)
        logger.debug(
            "Disposed",
            object_type=type(self).__name__,
            has_finalizer=finalizer is not None,
        )

        if finalizer is not None:
            finalizer()
