# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle
"""
Helpers for disposing one, many, or deferred collections of disposables.

Every helper accepts values implementing ``Disposable``. ``None`` entries and
values without a callable ``dispose`` are skipped without a report. Helpers
that trap failures pass them to a ``DisposalReporter`` and carry on.

Deferred helpers schedule on the running asyncio event loop and raise
``DeferredDisposalError`` when there is none.

The ``*_unsafe`` variants iterate the caller's collection directly. Use them
only when disposing an item cannot mutate that collection.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeVar

from dispose_lifecycle.config import get_settings
from dispose_lifecycle.errors import DeferredDisposalError, DisposalError
from dispose_lifecycle.logging import get_logger
from dispose_lifecycle.protocols import (
    AsyncDisposable,
    AsyncDisposableItem,
    Disposable,
    DisposableItem,
    DisposableItems,
)
from dispose_lifecycle.reporting import DisposalReporter, report_failure

logger = get_logger(__name__)

T = TypeVar("T")
D = TypeVar("D", bound=Disposable)

DeferredHandle = asyncio.Handle


def dispose_one(
    item: DisposableItem,
    trap_failure: bool = False,
    *,
    reporter: DisposalReporter | None = None,
) -> None:
    """Dispose a single item.

    Args:
        item: The item to dispose; ignored if None or not disposable
        trap_failure: Report a failure instead of raising it
        reporter: Receives trapped failures (default from settings)
    """
    _dispose_single(item, trap_failure, reporter)


def dispose_all(*items: DisposableItem) -> None:
    """Dispose every item in order. The first failure propagates and the
    remaining items are left alone."""
    _dispose_items(items, False, None)


def dispose_all_trapping(
    *items: DisposableItem, reporter: DisposalReporter | None = None
) -> None:
    """Dispose every item in order, reporting failures instead of raising."""
    _dispose_items(items, True, reporter)


def dispose_many(
    items: DisposableItems,
    trap_failure: bool = False,
    *,
    reporter: DisposalReporter | None = None,
) -> None:
    """Dispose a collection of items in order.

    The collection is copied first so disposal side effects that change it do
    not disturb the iteration.
    """
    if not items:
        return
    _dispose_items(list(items), trap_failure, reporter)


def dispose_many_unsafe(
    items: DisposableItems,
    trap_failure: bool = False,
    *,
    reporter: DisposalReporter | None = None,
) -> None:
    """Like ``dispose_many`` without the defensive copy."""
    if not items:
        return
    _dispose_items(items, trap_failure, reporter)


def dispose_deferred(
    *items: DisposableItem, reporter: DisposalReporter | None = None
) -> DeferredHandle | None:
    """Schedule the items for disposal at the next scheduling opportunity.

    Failures are always trapped and reported.

    Returns:
        The scheduling handle, or None if there was nothing to schedule

    Raises:
        DeferredDisposalError: If no asyncio event loop is running
    """
    return _schedule(list(items), 0, reporter)


def dispose_many_deferred(
    items: DisposableItems,
    delay_ms: float | None = None,
    *,
    reporter: DisposalReporter | None = None,
) -> DeferredHandle | None:
    """Schedule a copy of ``items`` for disposal after ``delay_ms``.

    Args:
        items: The items to dispose
        delay_ms: Milliseconds to wait; None uses
            ``DisposalSettings.deferred_delay_ms``. Zero or negative still
            defers rather than running inline.
        reporter: Receives trapped failures (default from settings)

    Returns:
        The scheduling handle, or None if there was nothing to schedule

    Raises:
        DeferredDisposalError: If no asyncio event loop is running
    """
    if not items:
        return None
    return _schedule(list(items), delay_ms, reporter)


def dispose_many_deferred_unsafe(
    items: DisposableItems,
    delay_ms: float | None = None,
    *,
    reporter: DisposalReporter | None = None,
) -> DeferredHandle | None:
    """Like ``dispose_many_deferred`` without the defensive copy."""
    if not items:
        return None
    return _schedule(items, delay_ms, reporter)


def using_scope(item: D, body: Callable[[D], T]) -> T:
    """Run ``body(item)`` and dispose ``item`` on every exit path.

    Disposal failures are not trapped. If ``body`` raises, the item is
    disposed before the exception propagates.

    Returns:
        Whatever ``body`` returns
    """
    try:
        return body(item)
    finally:
        _dispose_single(item, False, None)


async def dispose_one_async(
    item: AsyncDisposableItem,
    trap_failure: bool = False,
    *,
    reporter: DisposalReporter | None = None,
) -> None:
    """Dispose a single item, awaiting asynchronous disposal when offered.

    ``dispose_async()`` is preferred; otherwise ``dispose()`` is called and
    awaited if it returns an awaitable.
    """
    if item is None:
        return
    try:
        if _is_async_disposable(item):
            await item.dispose_async()
        elif _is_disposable(item):
            result = item.dispose()
            if inspect.isawaitable(result):
                await result
    except Exception as error:
        if not trap_failure:
            raise
        report_failure(reporter, item, error)


async def dispose_many_async(
    items: Iterable[AsyncDisposableItem] | None,
    trap_failure: bool = False,
    *,
    reporter: DisposalReporter | None = None,
) -> None:
    """Dispose a copy of ``items`` one after another, in order.

    Raises:
        DisposalError: Without trapping, on the first failure, chained to it
    """
    if not items:
        return
    for item in list(items):
        try:
            await dispose_one_async(item, trap_failure, reporter=reporter)
        except Exception as error:
            raise DisposalError.wrap(error, item) from error


async def using_scope_async(
    item: Any, body: Callable[[Any], Awaitable[T] | T]
) -> T:
    """Run ``body(item)``, awaiting its result if needed, and dispose
    ``item`` through ``dispose_one_async`` on every exit path."""
    try:
        result = body(item)
        if inspect.isawaitable(result):
            result = await result
        return result
    finally:
        await dispose_one_async(item)


def _is_disposable(item: Any) -> bool:
    return isinstance(item, Disposable) and callable(item.dispose)


def _is_async_disposable(item: Any) -> bool:
    return isinstance(item, AsyncDisposable) and callable(item.dispose_async)


def _dispose_single(
    item: DisposableItem, trap_failure: bool, reporter: DisposalReporter | None
) -> None:
    if not _is_disposable(item):
        return
    if not trap_failure:
        item.dispose()
        return
    try:
        item.dispose()
    except Exception as error:
        report_failure(reporter, item, error)


def _dispose_items(
    items: Iterable[DisposableItem],
    trap_failure: bool,
    reporter: DisposalReporter | None,
) -> None:
    for item in items:
        _dispose_single(item, trap_failure, reporter)


def _schedule(
    items: Iterable[DisposableItem],
    delay_ms: float | None,
    reporter: DisposalReporter | None,
) -> DeferredHandle | None:
    """Schedule trapped disposal of ``items`` on the running event loop.

    Disposal runs on the loop thread once the current callback has returned,
    never inline and never concurrently with the caller.
    """
    if not items:
        return None
    if delay_ms is None:
        delay_ms = get_settings().deferred_delay_ms
    delay = max(delay_ms, 0) / 1000

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError as error:
        raise DeferredDisposalError(delay_ms=delay_ms) from error

    logger.debug("Deferring disposal", delay_ms=delay_ms)
    if delay > 0:
        return loop.call_later(delay, _dispose_items, items, True, reporter)
    return loop.call_soon(_dispose_items, items, True, reporter)
