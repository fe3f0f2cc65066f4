from __future__ import annotations

from contextlib import nullcontext

import pytest

from notevim.runtime import telemetry


class RecordingLogger:
    def __init__(self) -> None:
        self.context: dict[str, str] = {}
        self.errors: list[tuple[str, list]] = []

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    def profile(self, name: str):
        return nullcontext()

    def track_component(self, name: str):
        return nullcontext()

    def error_with(self, message: str, pairs: list) -> None:
        self.errors.append((message, pairs))


@pytest.fixture
def logger(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    recorder = RecordingLogger()
    monkeypatch.setitem(telemetry._STATE.loggers, "test.spans", recorder)
    monkeypatch.setitem(telemetry._STATE.contexts, "test.spans", {})
    return recorder


def test_nested_span_restores_outer_context(logger: RecordingLogger) -> None:
    with telemetry.span("outer", logger_name="test.spans", metadata={"identity": "a.md"}):
        with telemetry.span(
            "inner", logger_name="test.spans", metadata={"identity": "b.md", "kind": "files"}
        ):
            assert logger.context == {"identity": "b.md", "kind": "files"}
        assert logger.context == {"identity": "a.md"}
    assert logger.context == {}


def test_failing_span_reports_and_clears_context(logger: RecordingLogger) -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("save", logger_name="test.spans", metadata={"identity": "a.md"}):
            raise RuntimeError("disk full")

    assert logger.context == {}
    assert logger.errors[0][0] == "span::fail"
    assert ("reason", "disk full") in logger.errors[0][1]
