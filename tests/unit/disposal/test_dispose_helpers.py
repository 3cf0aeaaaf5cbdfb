"""Tests for the synchronous bulk disposal helpers."""

from __future__ import annotations

import logging

import pytest

from dispose_lifecycle import (
    dispose_all,
    dispose_all_trapping,
    dispose_many,
    dispose_many_unsafe,
    dispose_one,
    using_scope,
)


class MockDisposable:
    def __init__(self, log: list | None = None, name: str = "") -> None:
        self.is_disposed = False
        self._log = log
        self._name = name

    def dispose(self) -> None:
        self.is_disposed = True
        if self._log is not None:
            self._log.append(self._name)


class FaultyDisposable:
    def dispose(self) -> None:
        raise RuntimeError("Disposal failed")


class NotDisposable:
    not_dispose = True


class NonCallableDispose:
    dispose = 5


class TestDisposeOne:
    def test_disposes(self) -> None:
        obj = MockDisposable()
        dispose_one(obj)
        assert obj.is_disposed

    def test_ignores_none_and_non_disposables(self) -> None:
        dispose_one(None)
        dispose_one(NotDisposable())  # type: ignore[arg-type]

    def test_propagates_by_default(self) -> None:
        with pytest.raises(RuntimeError, match="Disposal failed"):
            dispose_one(FaultyDisposable())

    def test_ignores_non_callable_dispose(self, reporter) -> None:
        dispose_one(NonCallableDispose())  # type: ignore[arg-type]
        dispose_one(
            NonCallableDispose(),  # type: ignore[arg-type]
            trap_failure=True,
            reporter=reporter,
        )
        assert reporter.reports == []

    def test_trap_failure_reports(self, reporter) -> None:
        faulty = FaultyDisposable()
        dispose_one(faulty, trap_failure=True, reporter=reporter)
        assert reporter.items == [faulty]
        assert isinstance(reporter.errors[0], RuntimeError)

    def test_trap_failure_logs_with_default_reporter(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR):
            dispose_one(FaultyDisposable(), trap_failure=True)
        records = [r for r in caplog.records if r.name == "dispose_lifecycle.reporting"]
        assert len(records) == 1
        assert "Error during disposal of FaultyDisposable" in records[0].getMessage()
        assert records[0].exc_info is not None


class TestDisposeAll:
    def test_disposes_in_order(self) -> None:
        log: list[str] = []
        a, b = MockDisposable(log, "a"), MockDisposable(log, "b")
        dispose_all(a, b)
        assert log == ["a", "b"]

    def test_skips_none(self) -> None:
        obj = MockDisposable()
        dispose_all(obj, None, NotDisposable())  # type: ignore[arg-type]
        assert obj.is_disposed

    def test_first_failure_aborts(self) -> None:
        x, y = MockDisposable(), MockDisposable()
        with pytest.raises(RuntimeError, match="Disposal failed"):
            dispose_all(x, FaultyDisposable(), y)
        assert x.is_disposed
        assert not y.is_disposed

    def test_no_arguments(self) -> None:
        dispose_all()


class TestDisposeAllTrapping:
    def test_disposes_everything_despite_failures(self, reporter) -> None:
        x, faulty, y = MockDisposable(), FaultyDisposable(), MockDisposable()
        dispose_all_trapping(x, faulty, y, reporter=reporter)
        assert x.is_disposed
        assert y.is_disposed
        assert reporter.items == [faulty]

    def test_reports_each_failure(self, reporter) -> None:
        first, second = FaultyDisposable(), FaultyDisposable()
        dispose_all_trapping(first, second, reporter=reporter)
        assert reporter.items == [first, second]

    def test_does_not_trap_base_exceptions(self) -> None:
        class Interrupting:
            def dispose(self) -> None:
                raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            dispose_all_trapping(Interrupting())


class TestDisposeMany:
    def test_skips_none_entries_in_order(self) -> None:
        log: list[str] = []
        a, b = MockDisposable(log, "a"), MockDisposable(log, "b")
        dispose_many([None, a, None, b])
        assert log == ["a", "b"]

    @pytest.mark.parametrize("items", [None, [], ()])
    def test_empty_is_noop(self, items) -> None:
        dispose_many(items)
        dispose_many_unsafe(items)

    def test_skips_non_callable_dispose(self, reporter) -> None:
        obj = MockDisposable()
        dispose_many([NonCallableDispose(), obj])  # type: ignore[list-item]
        dispose_all_trapping(NonCallableDispose(), reporter=reporter)  # type: ignore[arg-type]
        assert obj.is_disposed
        assert reporter.reports == []

    def test_trap_failure(self, reporter) -> None:
        obj = MockDisposable()
        faulty = FaultyDisposable()
        dispose_many([obj, faulty], trap_failure=True, reporter=reporter)
        assert obj.is_disposed
        assert reporter.items == [faulty]

    def test_accepts_any_iterable(self) -> None:
        objs = [MockDisposable(), MockDisposable()]
        dispose_many(o for o in objs)
        assert all(o.is_disposed for o in objs)

    def test_copy_survives_mutation_during_disposal(self) -> None:
        items: list = []

        class Unregistering(MockDisposable):
            def dispose(self) -> None:
                super().dispose()
                items.remove(self)

        items.extend(Unregistering() for _ in range(4))
        snapshot = list(items)
        dispose_many(items)
        assert all(o.is_disposed for o in snapshot)
        assert items == []

    def test_unsafe_iterates_original(self) -> None:
        items: list = []

        class Unregistering(MockDisposable):
            def dispose(self) -> None:
                super().dispose()
                items.remove(self)

        items.extend(Unregistering() for _ in range(4))
        snapshot = list(items)
        dispose_many_unsafe(items)
        # Removing while iterating skips every other entry.
        assert [o.is_disposed for o in snapshot] == [True, False, True, False]


class TestUsingScope:
    def test_returns_body_result_and_disposes(self) -> None:
        obj = MockDisposable()

        def body(d: MockDisposable) -> str:
            assert d is obj
            assert not d.is_disposed
            return "success"

        assert using_scope(obj, body) == "success"
        assert obj.is_disposed

    def test_disposes_when_body_raises(self) -> None:
        obj = MockDisposable()

        def body(_: MockDisposable) -> None:
            raise ValueError("Closure failed")

        with pytest.raises(ValueError, match="Closure failed"):
            using_scope(obj, body)
        assert obj.is_disposed

    def test_disposal_failure_propagates(self) -> None:
        with pytest.raises(RuntimeError, match="Disposal failed"):
            using_scope(FaultyDisposable(), lambda _: 1)

    def test_disposes_exactly_once(self) -> None:
        class Counting:
            calls = 0

            def dispose(self) -> None:
                self.calls += 1

        obj = Counting()
        using_scope(obj, lambda _: None)
        assert obj.calls == 1
