"""In-memory sinks: collect signals, or forward them to a callable."""

from __future__ import annotations

import logging
from collections.abc import Callable

from buildinfo.models.signals import (
    FinishedSignal,
    ProgressSignal,
    ResetSignal,
    SignalKind,
    UpdateSignal,
)

logger = logging.getLogger(__name__)


class MemorySink:
    """Keeps every accepted signal in arrival order."""

    def __init__(self, name: str = "memory") -> None:
        self._name = name
        self.signals: list[ProgressSignal] = []

    @property
    def sink_name(self) -> str:
        return self._name

    def accept(self, signal: ProgressSignal) -> None:
        self.signals.append(signal)
        logger.debug("%s recorded %s signal", self._name, signal.kind.value)

    def of_kind(self, kind: SignalKind) -> list[ProgressSignal]:
        return [s for s in self.signals if s.kind == kind]

    @property
    def resets(self) -> list[ResetSignal]:
        return [s for s in self.signals if isinstance(s, ResetSignal)]

    @property
    def updates(self) -> list[UpdateSignal]:
        return [s for s in self.signals if isinstance(s, UpdateSignal)]

    @property
    def finished(self) -> list[FinishedSignal]:
        return [s for s in self.signals if isinstance(s, FinishedSignal)]

    def clear(self) -> None:
        self.signals.clear()


class CallbackSink:
    """Adapts a plain callable into a sink."""

    def __init__(self, callback: Callable[[ProgressSignal], None], name: str = "callback") -> None:
        self._callback = callback
        self._name = name

    @property
    def sink_name(self) -> str:
        return self._name

    def accept(self, signal: ProgressSignal) -> None:
        self._callback(signal)
