# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle

"""
Deterministic disposal for Python objects.

Subclass ``DisposableBase`` (or ``AsyncDisposableBase``) and override
``_on_dispose`` to get idempotent disposal, liveness checks and a one-shot
finalizer. Use the ``dispose_*`` helpers to dispose groups of objects.
"""

from __future__ import annotations

from dispose_lifecycle.adapters import DisposableAdapter, as_disposable
from dispose_lifecycle.base import AsyncDisposableBase, DisposableBase
from dispose_lifecycle.config import (
    DisposalSettings,
    clear_settings_cache,
    get_settings,
)
from dispose_lifecycle.dispose import (
    dispose_all,
    dispose_all_trapping,
    dispose_deferred,
    dispose_many,
    dispose_many_async,
    dispose_many_deferred,
    dispose_many_deferred_unsafe,
    dispose_many_unsafe,
    dispose_one,
    dispose_one_async,
    using_scope,
    using_scope_async,
)
from dispose_lifecycle.errors import (
    DeferredDisposalError,
    DisposalError,
    DisposalStateError,
    LifecycleError,
    ObjectDisposedError,
)
from dispose_lifecycle.protocols import (
    AsyncDisposable,
    AsyncDisposableAware,
    Disposable,
    DisposableAware,
)
from dispose_lifecycle.reporting import (
    DisposalReporter,
    LoggingReporter,
    get_default_reporter,
    null_reporter,
)
from dispose_lifecycle.state import DisposableStateBase, DisposeState

__all__ = [
    # Contracts
    "Disposable",
    "DisposableAware",
    "AsyncDisposable",
    "AsyncDisposableAware",
    # State machine and templates
    "DisposeState",
    "DisposableStateBase",
    "DisposableBase",
    "AsyncDisposableBase",
    # Errors
    "LifecycleError",
    "ObjectDisposedError",
    "DisposalStateError",
    "DisposalError",
    "DeferredDisposalError",
    # Helpers
    "dispose_one",
    "dispose_all",
    "dispose_all_trapping",
    "dispose_many",
    "dispose_many_unsafe",
    "dispose_deferred",
    "dispose_many_deferred",
    "dispose_many_deferred_unsafe",
    "using_scope",
    "dispose_one_async",
    "dispose_many_async",
    "using_scope_async",
    # Adapters
    "DisposableAdapter",
    "as_disposable",
    # Reporting
    "DisposalReporter",
    "LoggingReporter",
    "get_default_reporter",
    "null_reporter",
    # Settings
    "DisposalSettings",
    "get_settings",
    "clear_settings_cache",
]
