"""Tests for trapped-failure reporting."""

from __future__ import annotations

import logging

import pytest

from dispose_lifecycle import dispose_all_trapping
from dispose_lifecycle.logging import LogLevel
from dispose_lifecycle.reporting import (
    LoggingReporter,
    get_default_reporter,
    null_reporter,
    report_failure,
)

REPORTING_LOGGER = "dispose_lifecycle.reporting"


class Resource:
    pass


def _reporting_records(caplog: pytest.LogCaptureFixture) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == REPORTING_LOGGER]


def _raise(error: BaseException) -> BaseException:
    try:
        raise error
    except BaseException as caught:
        return caught


def test_logging_reporter_logs_item_and_error(caplog: pytest.LogCaptureFixture) -> None:
    error = _raise(RuntimeError("boom"))
    with caplog.at_level(logging.ERROR):
        LoggingReporter()(Resource(), error)

    [record] = _reporting_records(caplog)
    assert record.levelno == logging.ERROR
    assert record.getMessage() == "Error during disposal of Resource: boom"
    assert record.funcName == "__call__"
    assert record.exc_info is not None
    assert record.exc_info[1] is error
    assert record.lifecycle_context == {
        "item_type": "Resource",
        "error_type": "RuntimeError",
    }


def test_logging_reporter_honours_level(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        LoggingReporter(LogLevel.WARNING)(Resource(), ValueError("soft"))
    [record] = _reporting_records(caplog)
    assert record.levelno == logging.WARNING


def test_null_reporter_ignores_everything() -> None:
    assert null_reporter(Resource(), RuntimeError("ignored")) is None


def test_default_reporter_logs() -> None:
    reporter = get_default_reporter()
    assert isinstance(reporter, LoggingReporter)
    assert reporter.level is LogLevel.ERROR


def test_default_reporter_follows_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DISPOSE_LIFECYCLE_REPORT_LEVEL", "warning")
    reporter = get_default_reporter()
    assert isinstance(reporter, LoggingReporter)
    assert reporter.level is LogLevel.WARNING


def test_reporting_disabled_by_settings(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("DISPOSE_LIFECYCLE_REPORT_FAILURES", "false")
    assert get_default_reporter() is null_reporter

    class Faulty:
        def dispose(self) -> None:
            raise RuntimeError("quiet")

    with caplog.at_level(logging.DEBUG, logger="dispose_lifecycle"):
        dispose_all_trapping(Faulty())
    assert _reporting_records(caplog) == []


def test_failing_reporter_is_logged_not_raised(
    caplog: pytest.LogCaptureFixture,
) -> None:
    def broken(item: object, error: BaseException) -> None:
        raise LookupError("reporter broke")

    with caplog.at_level(logging.ERROR):
        report_failure(broken, Resource(), RuntimeError("original"))

    [record] = _reporting_records(caplog)
    assert record.getMessage() == "Disposal reporter failed"
    assert record.exc_info is not None
    assert isinstance(record.exc_info[1], LookupError)
    assert record.lifecycle_context["item_type"] == "Resource"


def test_explicit_reporter_takes_precedence(reporter) -> None:
    error = RuntimeError("x")
    item = Resource()
    report_failure(reporter, item, error)
    assert reporter.reports == [(item, error)]
