# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle
"""
Disposal templates.

``DisposableBase`` and ``AsyncDisposableBase`` fix the disposal sequence;
subclasses override ``_on_dispose`` / ``_on_dispose_async`` to release their
own resources. Neither ``dispose`` nor ``dispose_async`` should be overridden.
"""

from __future__ import annotations

from types import TracebackType
from typing import Self

from dispose_lifecycle.state import DisposableStateBase, Finalizer


class DisposableBase(DisposableStateBase):
    """Synchronous disposal template.

    Usable as a context manager: leaving the ``with`` block disposes the
    object. Instantiated directly it behaves as a disposable action that only
    runs its finalizer.
    """

    def __init__(self, finalizer: Finalizer | None = None) -> None:
        super().__init__(finalizer)

    def dispose(self) -> None:
        """Dispose the object. Later calls do nothing."""
        try:
            if not self._start_dispose():
                return
        except BaseException:
            # _on_before_dispose failed after disposal was committed.
            self._finish_dispose()
            raise

        try:
            self._on_dispose()
        finally:
            self._finish_dispose()

    def _on_dispose(self) -> None:
        """Release resources. Called once; never call it directly."""

    def __enter__(self) -> Self:
        self.assert_is_alive()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()


class AsyncDisposableBase(DisposableStateBase):
    """Asynchronous disposal template.

    Usable as an async context manager.
    """

    def __init__(self, finalizer: Finalizer | None = None) -> None:
        super().__init__(finalizer)

    async def dispose_async(self) -> None:
        """Dispose the object, awaiting ``_on_dispose_async``.

        Disposal finishes even if the hook raises or the awaiting task is
        cancelled; the failure then propagates to the caller.
        """
        try:
            if not self._start_dispose():
                return
        except BaseException:
            self._finish_dispose()
            raise

        try:
            await self._on_dispose_async()
        finally:
            self._finish_dispose()

    async def _on_dispose_async(self) -> None:
        """Release resources. Called once; never call it directly."""

    async def __aenter__(self) -> Self:
        self.assert_is_alive()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.dispose_async()
