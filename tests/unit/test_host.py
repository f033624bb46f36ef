"""Unit tests for adapters.host."""
from __future__ import annotations

import io

from rich.console import Console

from adapters.host import RichProgressSink, StaticEnvironment


def test_static_environment() -> None:
    assert StaticEnvironment("https://org.example").current_environment() == "https://org.example"


def test_busy_indicator_starts_and_stops() -> None:
    sink = RichProgressSink(Console(file=io.StringIO(), force_terminal=False))
    sink.show_busy("Processing your request...")
    assert sink._status is not None
    sink.clear_busy()
    assert sink._status is None
    # Clearing twice is harmless.
    sink.clear_busy()


def test_log_error_does_not_raise() -> None:
    sink = RichProgressSink(Console(file=io.StringIO()))
    sink.log_error("Endpoint action error", ValueError("boom"))
