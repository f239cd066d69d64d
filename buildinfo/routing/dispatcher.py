"""SignalDispatcher: fans progress signals out to every registered sink.

Dispatch never raises.  Build output keeps flowing through the engine
even when the UI behind a sink has gone away; each call returns a
``DispatchReport`` saying which sinks took the signal, and the dispatcher
keeps a running failure count per sink so a host can notice a dead one.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING, NamedTuple

from buildinfo.models.signals import ProgressSignal

if TYPE_CHECKING:
    from buildinfo.routing.sinks import ProgressSink

logger = logging.getLogger(__name__)


class DispatchReport(NamedTuple):
    """Outcome of delivering one signal."""

    signal: ProgressSignal
    delivered: tuple[str, ...]
    failed: tuple[str, ...]

    @property
    def dropped(self) -> bool:
        """True when sinks were registered but none of them took the signal."""
        return bool(self.failed) and not self.delivered


class SignalDispatcher:
    """Routes signals to every registered sink, in registration order.

    Usage
    -----
    >>> dispatcher = SignalDispatcher()
    >>> dispatcher.register_sink(memory_sink)
    >>> report = dispatcher.dispatch(signal)
    >>> report.delivered
    ('memory',)
    """

    def __init__(self) -> None:
        self._sinks: list[ProgressSink] = []
        self._failures: Counter[str] = Counter()

    def register_sink(self, sink: ProgressSink) -> None:
        """Register a sink.  Registering the same instance twice is a no-op."""
        if sink not in self._sinks:
            self._sinks.append(sink)
            logger.debug("Registered sink: %s", sink.sink_name)

    def unregister_sink(self, sink: ProgressSink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)
            logger.debug("Unregistered sink: %s", sink.sink_name)

    @property
    def registered_sinks(self) -> list[ProgressSink]:
        return list(self._sinks)

    @property
    def failure_counts(self) -> dict[str, int]:
        """Signals each sink has failed to accept since construction."""
        return dict(self._failures)

    def dispatch(self, signal: ProgressSignal) -> DispatchReport:
        """Offer *signal* to each sink and report who accepted it."""
        delivered: list[str] = []
        failed: list[str] = []

        for sink in list(self._sinks):
            name = sink.sink_name
            try:
                sink.accept(signal)
            except Exception:  # noqa: BLE001
                logger.exception("Sink %s rejected %s signal", name, signal.kind.value)
                self._failures[name] += 1
                failed.append(name)
            else:
                delivered.append(name)

        return DispatchReport(signal, tuple(delivered), tuple(failed))
