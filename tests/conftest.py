"""Shared test fixtures for buildinfo."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from buildinfo.config import ProgressConfig
from buildinfo.core.classifier import StageClassifier
from buildinfo.core.controller import SessionController
from buildinfo.core.timing_ledger import TimingLedger
from buildinfo.routing.sinks.memory import MemorySink


class FakeClock:
    """Deterministic wall clock; advance it explicitly in tests."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Provide a clock starting at a fixed epoch second."""
    return FakeClock()


@pytest.fixture
def config() -> ProgressConfig:
    """Provide a config that ignores the process environment."""
    return ProgressConfig(
        enabled=True,
        bar_style="Block Width",
        bar_length=10,
        run_icon_type="Circled",
        window_lines=50,
    )


@pytest.fixture
def sink() -> MemorySink:
    """Provide an empty in-memory sink."""
    return MemorySink()


@pytest.fixture
def controller(config: ProgressConfig, sink: MemorySink, clock: FakeClock) -> SessionController:
    """Provide an idle controller wired to the memory sink and fake clock."""
    return SessionController(config, sinks=[sink], clock=clock)


@pytest.fixture
def running(controller: SessionController) -> SessionController:
    """Provide a controller with a session already started."""
    controller.start()
    return controller


@pytest.fixture
def classifier() -> StageClassifier:
    """Provide a classifier with the built-in tool signatures."""
    return StageClassifier()


@pytest.fixture
def ledger() -> TimingLedger:
    """Provide an empty TimingLedger."""
    return TimingLedger()


@pytest.fixture
def make_window() -> Callable[..., str]:
    """Factory fixture: rolling-window text whose last lines are the arguments."""

    def _factory(*lines: str, capacity: int = 50) -> str:
        padding = [""] * (capacity - len(lines))
        return "\n".join(padding + list(lines))

    return _factory
