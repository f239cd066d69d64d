"""Sink protocol for buildinfo progress signals.

All sinks implement the ``ProgressSink`` protocol: a ``sink_name`` property
and an ``accept(signal)`` method.  The dispatcher calls ``accept`` on
every registered sink for every emitted signal.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from buildinfo.models.signals import ProgressSignal


@runtime_checkable
class ProgressSink(Protocol):
    """Protocol that every progress sink must implement.

    Attributes
    ----------
    sink_name : str
        A unique human-readable identifier for this sink instance
        (e.g. ``"memory"``, ``"status_line"``).
    """

    @property
    def sink_name(self) -> str:
        """Return the unique name of this sink."""
        ...

    def accept(self, signal: ProgressSignal) -> None:
        """Accept and present a signal.

        A sink may raise; the dispatcher logs the failure and continues
        with the next sink.
        """
        ...
