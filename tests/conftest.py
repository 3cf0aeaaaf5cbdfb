"""Top-level pytest configuration for dispose-lifecycle."""

from __future__ import annotations

import os
from typing import Any

import pytest

from dispose_lifecycle.config import clear_settings_cache


class RecordingReporter:
    """Reporter that keeps every trapped failure for assertions."""

    def __init__(self) -> None:
        self.reports: list[tuple[Any, BaseException]] = []

    def __call__(self, item: Any, error: BaseException) -> None:
        self.reports.append((item, error))

    @property
    def items(self) -> list[Any]:
        return [item for item, _ in self.reports]

    @property
    def errors(self) -> list[BaseException]:
        return [error for _, error in self.reports]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop DISPOSE_LIFECYCLE_* variables and the settings cache around each test."""
    for key in list(os.environ):
        if key.startswith("DISPOSE_LIFECYCLE_"):
            monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


def pytest_configure(config):
    """Configure pytest to recognize our custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (deselect with '-m "
        "not integration')",
    )
