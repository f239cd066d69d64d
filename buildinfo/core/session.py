"""Mutable state for one build run."""

from __future__ import annotations

from concurrent.futures import Future

from buildinfo.core.rolling_window import DEFAULT_WINDOW_LINES, RollingWindow
from buildinfo.core.timing_ledger import TimingLedger
from buildinfo.models.stages import StageKey


class PageEstimate:
    """Best current guess at the total page count.

    The value never decreases within a session.  Once an authoritative
    total has been supplied, inference from observed pages stops.
    """

    def __init__(self) -> None:
        self._value: int | None = None
        self._authoritative = False

    @property
    def value(self) -> int | None:
        return self._value

    @property
    def authoritative(self) -> bool:
        return self._authoritative

    def infer(self, observed_pages: int) -> None:
        """Raise the estimate to *observed_pages* unless it is authoritative."""
        if self._authoritative:
            return
        self._raise_to(observed_pages)

    def set_authoritative(self, total: int) -> None:
        if total < 0:
            raise ValueError(f"Page total cannot be negative, got {total}")
        self._authoritative = True
        self._raise_to(total)

    def _raise_to(self, candidate: int) -> None:
        if self._value is None or candidate > self._value:
            self._value = candidate


class BuildSession:
    """State of one running build.

    Parameters
    ----------
    start_ms:
        Wall-clock start in milliseconds.
    window_lines:
        Capacity of the rolling text window.
    """

    def __init__(self, start_ms: int, window_lines: int = DEFAULT_WINDOW_LINES) -> None:
        self.start_ms = start_ms
        self.last_event_ms = start_ms
        self.stage_started_ms = start_ms
        self.page_estimate = PageEstimate()
        self.window = RollingWindow(window_lines)
        self.ledger = TimingLedger()
        self.stage_number = 0
        self.stage_name = ""
        self.produces_pages: bool | None = None
        self.completion: Future[float] = Future()

    @property
    def stage_key(self) -> StageKey:
        return StageKey(number=self.stage_number, name=self.stage_name)

    @property
    def in_stage(self) -> bool:
        return self.stage_number > 0
