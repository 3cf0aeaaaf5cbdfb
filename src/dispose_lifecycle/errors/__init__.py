# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle

"""
Error handling for dispose-lifecycle.
"""

from __future__ import annotations

from dispose_lifecycle.errors.base import (
    ErrorCategory,
    ErrorCode,
    ErrorSeverity,
    LifecycleError,
)
from dispose_lifecycle.errors.disposal import (
    DISPOSAL,
    DISPOSAL_FAILED,
    DISPOSAL_STATE,
    NO_EVENT_LOOP,
    OBJECT_DISPOSED,
    DeferredDisposalError,
    DisposalError,
    DisposalStateError,
    ObjectDisposedError,
)

__all__ = [
    # Error categories
    "ErrorCode",
    "ErrorCategory",
    "ErrorSeverity",
    "DISPOSAL",
    "OBJECT_DISPOSED",
    "DISPOSAL_STATE",
    "DISPOSAL_FAILED",
    "NO_EVENT_LOOP",
    # Errors
    "LifecycleError",
    "ObjectDisposedError",
    "DisposalStateError",
    "DisposalError",
    "DeferredDisposalError",
]
