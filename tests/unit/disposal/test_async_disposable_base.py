"""Tests for the asynchronous disposal template."""

from __future__ import annotations

import asyncio
from unittest.mock import Mock

import pytest

from dispose_lifecycle import (
    AsyncDisposable,
    AsyncDisposableAware,
    AsyncDisposableBase,
    DisposeState,
    ObjectDisposedError,
)


class AsyncResource(AsyncDisposableBase):
    def __init__(self, finalizer=None):
        super().__init__(finalizer)
        self.released = 0

    async def _on_dispose_async(self) -> None:
        await asyncio.sleep(0.001)
        self.released += 1


class FaultyAsyncResource(AsyncDisposableBase):
    async def _on_dispose_async(self) -> None:
        raise RuntimeError("Async disposal failed")


class SlowAsyncResource(AsyncDisposableBase):
    def __init__(self, finalizer=None):
        super().__init__(finalizer)
        self.started = asyncio.Event()

    async def _on_dispose_async(self) -> None:
        self.started.set()
        await asyncio.sleep(10)


@pytest.mark.asyncio
async def test_dispose_async() -> None:
    resource = AsyncResource()
    assert resource.was_disposed is False

    await resource.dispose_async()

    assert resource.was_disposed is True
    assert resource.released == 1


@pytest.mark.asyncio
async def test_dispose_async_is_idempotent() -> None:
    finalizer = Mock()
    resource = AsyncResource(finalizer)
    await resource.dispose_async()
    await resource.dispose_async()
    assert resource.released == 1
    finalizer.assert_called_once()


@pytest.mark.asyncio
async def test_concurrent_dispose_runs_teardown_once() -> None:
    resource = AsyncResource()
    await asyncio.gather(*(resource.dispose_async() for _ in range(5)))
    assert resource.released == 1
    assert resource.dispose_state is DisposeState.DISPOSED


@pytest.mark.asyncio
async def test_state_is_disposing_while_hook_is_suspended() -> None:
    resource = SlowAsyncResource()
    task = asyncio.create_task(resource.dispose_async())
    await resource.started.wait()

    assert resource.dispose_state is DisposeState.DISPOSING
    assert resource.was_disposed is True

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_cancelled_hook_still_finalizes() -> None:
    finalizer = Mock()
    resource = SlowAsyncResource(finalizer)
    task = asyncio.create_task(resource.dispose_async())
    await resource.started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert resource.dispose_state is DisposeState.DISPOSED
    finalizer.assert_called_once()


@pytest.mark.asyncio
async def test_hook_failure_still_finalizes_and_propagates() -> None:
    finalizer = Mock()
    faulty = FaultyAsyncResource(finalizer)

    with pytest.raises(RuntimeError, match="Async disposal failed"):
        await faulty.dispose_async()

    assert faulty.was_disposed is True
    assert faulty.dispose_state is DisposeState.DISPOSED
    finalizer.assert_called_once()


@pytest.mark.asyncio
async def test_async_context_manager() -> None:
    async with AsyncResource() as resource:
        assert resource.assert_is_alive() is True
    assert resource.released == 1

    with pytest.raises(ObjectDisposedError):
        async with resource:
            pass


def test_has_state_machine_surface() -> None:
    resource = AsyncResource()
    assert callable(resource.assert_is_alive)
    assert isinstance(resource, AsyncDisposable)
    assert isinstance(resource, AsyncDisposableAware)
