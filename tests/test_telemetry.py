from __future__ import annotations

import pytest

from repl_frontend.runtime import telemetry
from repl_frontend.settings import FrontendSettings


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="silent")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_loggers_are_cached_per_name() -> None:
    telemetry.configure(settings=FrontendSettings())

    assert telemetry.get_logger("editor") is telemetry.get_logger("editor")
    assert telemetry.get_logger() is telemetry.get_logger("repl_frontend")


def test_span_reraises_and_keeps_metadata() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("test::span", metadata={"k": 1}) as handle:
            handle.add_metadata("extra", [1, 2])
            assert handle.metadata == {"k": "1", "extra": "[1, 2]"}
            raise RuntimeError("boom")


def test_record_event_accepts_levels() -> None:
    telemetry.record_event("test.event", data={"n": 1})
    telemetry.record_event("test.event", level="warning")
    with pytest.raises(ValueError):
        telemetry.record_event("test.event", level="loud")
