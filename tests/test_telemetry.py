from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Tuple

import pytest

from helix_trainer.runtime import telemetry


class RecordingLogger:
    def __init__(self) -> None:
        self.lines: List[Tuple[str, str, Any]] = []
        self.context: dict[str, str] = {}
        self.profiled: List[str] = []
        self.components: List[str] = []

    def info_with(self, message: str, pairs: Any) -> None:
        self.lines.append(("info", message, dict(pairs)))

    def error_with(self, message: str, pairs: Any) -> None:
        self.lines.append(("error", message, dict(pairs)))

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.profiled.append(name)
        yield

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield


def make_logger(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    logger = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    return logger


def test_record_event_attaches_data(monkeypatch: pytest.MonkeyPatch) -> None:
    logger = make_logger(monkeypatch)

    telemetry.record_event("mode.switch", data={"mode": "insert"})

    assert logger.lines == [
        ("info", "event::mode.switch", {"event": "mode.switch", "mode": "insert"})
    ]


def test_record_event_rejects_unknown_level(monkeypatch: pytest.MonkeyPatch) -> None:
    make_logger(monkeypatch)

    with pytest.raises(ValueError):
        telemetry.record_event("x", level="loud")


def test_span_profiles_and_scopes_context(monkeypatch: pytest.MonkeyPatch) -> None:
    logger = make_logger(monkeypatch)

    with telemetry.span("mode::normal", component=True, metadata={"key": "x"}) as handle:
        assert logger.context == {"key": "x"}
        handle.add_metadata("edits", 2)

    assert logger.profiled == ["mode::normal"]
    assert logger.components == ["mode::normal"]
    assert logger.context == {}
    assert handle.metadata == {"key": "x", "edits": "2"}


def test_span_reports_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    logger = make_logger(monkeypatch)

    with pytest.raises(RuntimeError):
        with telemetry.span("buffer::edit", component="buffer"):
            raise RuntimeError("boom")

    level, message, payload = logger.lines[-1]
    assert (level, message) == ("error", "span::fail")
    assert payload["reason"] == "boom"
    assert payload["component"] == "buffer"
    assert logger.components == ["buffer"]


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")
