# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: dispose-lifecycle
"""Single registry for error categories and codes."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dispose_lifecycle.errors.base import ErrorCategory, ErrorCode


class ErrorRegistry:
    """Singleton registry for all error codes and categories."""

    _instance: ErrorRegistry | None = None
    _lock = threading.RLock()

    _categories: dict[str, ErrorCategory]
    _codes: dict[str, ErrorCode]

    def __new__(cls) -> ErrorRegistry:
        with cls._lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._categories = {}
                instance._codes = {}
                cls._instance = instance
            return cls._instance

    def get_category(
        self, name: str, parent: ErrorCategory | None = None
    ) -> ErrorCategory:
        """Get or create a category.

        Args:
            name: The category name
            parent: Optional parent category, only used on creation

        Returns:
            The registered ErrorCategory
        """
        with self._lock:
            if name in self._categories:
                return self._categories[name]

            from dispose_lifecycle.errors.base import ErrorCategory

            category = ErrorCategory(name, parent)
            self._categories[name] = category
            return category

    def get_code(self, code: str, category_name: str = "INTERNAL") -> ErrorCode:
        """Get or create an error code within a category.

        Args:
            code: The error code
            category_name: The category name (defaults to INTERNAL)

        Returns:
            The registered ErrorCode
        """
        with self._lock:
            key = f"{category_name}.{code}"
            if key in self._codes:
                return self._codes[key]

            category = self.get_category(category_name)

            from dispose_lifecycle.errors.base import ErrorCode

            error_code = ErrorCode(code, category)
            self._codes[key] = error_code
            return error_code

    def lookup_code(self, code: str) -> ErrorCode | None:
        """Look up an error code by its bare name without creating it."""
        with self._lock:
            for error_code in self._codes.values():
                if error_code.code == code:
                    return error_code
            return None

    def get_all_categories(self) -> list[ErrorCategory]:
        with self._lock:
            return list(self._categories.values())

    def get_all_codes(self) -> list[ErrorCode]:
        with self._lock:
            return list(self._codes.values())


registry = ErrorRegistry()
