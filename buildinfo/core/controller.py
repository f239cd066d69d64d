"""Session controller: the single owner of build progress state.

The controller turns raw build output into progress signals:

    append_output(text)
        -> RollingWindow.shift(line)           (per line)
        -> StageClassifier.classify(window)    (zero or one event)
        -> TimingLedger / PageEstimate update
        -> SignalDispatcher.dispatch(signal)

Lifecycle is Idle -> Running -> Idle, one session at a time.  All
mutating calls are serialised by a re-entrant lock, so output may be fed
from a reader thread while another thread sets the page total or ends
the build.

Sink failures never interrupt ingestion: a signal no sink accepts is
logged and counted in ``dropped_signals``, and the rest of the chunk is
still processed.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable
from concurrent.futures import Future

from buildinfo.config import ProgressConfig
from buildinfo.core.classifier import StageClassifier
from buildinfo.core.session import BuildSession
from buildinfo.models.ledger import LedgerSnapshot
from buildinfo.models.signals import (
    FinishedSignal,
    PageCompleted,
    ProgressSignal,
    ResetSignal,
    StageEvent,
    StageStarted,
    UpdateSignal,
)
from buildinfo.routing.dispatcher import SignalDispatcher
from buildinfo.routing.sinks import ProgressSink

logger = logging.getLogger(__name__)


class EngineNotStartedError(RuntimeError):
    """Raised when a per-session operation is called with no running build."""


class SessionAlreadyActiveError(RuntimeError):
    """Raised when ``start()`` is called while a build is still running."""


class SessionController:
    """Tracks one build at a time and emits progress signals.

    Parameters
    ----------
    config:
        Configuration snapshot.  ``config.enabled`` is captured here; when
        False every operation is a no-op apart from resolving the
        completion future on ``end()``.
    sinks:
        Sinks to register on the controller's dispatcher.
    classifier:
        Stage classifier.  Defaults to one using the built-in signatures.
    clock:
        Returns wall-clock seconds.  Defaults to ``time.time``.
    """

    def __init__(
        self,
        config: ProgressConfig | None = None,
        sinks: Iterable[ProgressSink] = (),
        *,
        classifier: StageClassifier | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config or ProgressConfig()
        self._enabled = self.config.enabled
        self._classifier = classifier or StageClassifier()
        self._clock = clock
        self._lock = threading.RLock()

        self.dispatcher = SignalDispatcher()
        for sink in sinks:
            self.dispatcher.register_sink(sink)

        self._session: BuildSession | None = None
        # Used only while disabled, where no session is allocated.
        self._disabled_completion: Future[float] | None = None
        self._disabled_start_ms = 0
        self._dropped_signals = 0

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def is_running(self) -> bool:
        return self._session is not None

    @property
    def stage_number(self) -> int:
        return self._session.stage_number if self._session else 0

    @property
    def stage_name(self) -> str:
        return self._session.stage_name if self._session else ""

    @property
    def produces_pages(self) -> bool | None:
        return self._session.produces_pages if self._session else None

    @property
    def page_total(self) -> int | None:
        return self._session.page_estimate.value if self._session else None

    @property
    def dropped_signals(self) -> int:
        """Signals that no registered sink accepted."""
        return self._dropped_signals

    @property
    def session(self) -> BuildSession | None:
        """The live session, or None when idle."""
        return self._session

    def _now_ms(self) -> int:
        return int(round(self._clock() * 1000))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> Future[float]:
        """Begin tracking a new build.

        Returns a future resolved with the build's elapsed seconds when
        ``end()`` is called.

        Raises
        ------
        SessionAlreadyActiveError
            If a build is already being tracked.
        """
        with self._lock:
            if not self._enabled:
                if self._disabled_completion is None or self._disabled_completion.done():
                    self._disabled_completion = Future()
                    self._disabled_start_ms = self._now_ms()
                return self._disabled_completion

            if self._session is not None:
                raise SessionAlreadyActiveError(
                    "A build is already being tracked; call end() before start()"
                )

            self._session = BuildSession(self._now_ms(), self.config.window_lines)
            logger.info("Build progress session started")
            return self._session.completion

    def end(self) -> float:
        """Finish the current build and return its elapsed seconds.

        Emits a ``FinishedSignal`` and resolves the completion future.

        Raises
        ------
        EngineNotStartedError
            If no build is being tracked.
        """
        with self._lock:
            if not self._enabled:
                return self._end_disabled()

            session = self._require_session()
            now = self._now_ms()
            elapsed_ms = now - session.start_ms
            self._session = None

            logger.info(
                "Build finished after %.1f s (%d stages)",
                elapsed_ms / 1000,
                session.stage_number,
            )
            self._emit(FinishedSignal(timestamp_ms=now, elapsed_ms=elapsed_ms))
            session.completion.set_result(elapsed_ms / 1000)
            return elapsed_ms / 1000

    def _end_disabled(self) -> float:
        completion = self._disabled_completion
        if completion is None or completion.done():
            return 0.0
        elapsed = (self._now_ms() - self._disabled_start_ms) / 1000
        completion.set_result(elapsed)
        return elapsed

    def _require_session(self) -> BuildSession:
        if self._session is None:
            raise EngineNotStartedError(
                "Cannot track progress for a build that was not started; call start() first"
            )
        return self._session

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def append_output(self, text: str) -> None:
        """Feed raw build output.

        *text* is split on newlines and each line is pushed through the
        window and classifier in order.  Callers should pass whole lines; a
        chunk ending in a newline contributes a trailing empty line.

        Raises
        ------
        EngineNotStartedError
            If no build is being tracked.
        """
        with self._lock:
            if not self._enabled:
                return
            session = self._require_session()
            for line in text.split("\n"):
                session.window.shift(line)
                event = self._classifier.classify(session.window.text, session.produces_pages)
                if event is not None:
                    self._apply(session, event)

    def set_page_total(self, total: int) -> None:
        """Supply an authoritative total page count.  No-op when idle."""
        with self._lock:
            if not self._enabled or self._session is None:
                return
            self._session.page_estimate.set_authoritative(total)
            logger.debug("Authoritative page total set to %d", total)

    def report_step(self, label: str) -> UpdateSignal | None:
        """Record a generic, unnumbered step in the current stage.

        Returns the emitted signal, or None when disabled or when no stage
        has started yet.

        Raises
        ------
        EngineNotStartedError
            If no build is being tracked.
        """
        with self._lock:
            if not self._enabled:
                return None
            session = self._require_session()
            if not session.in_stage:
                logger.debug("Ignoring step %r reported before any stage started", label)
                return None

            now = self._now_ms()
            entry = session.ledger.record_step(
                session.stage_key, now, now - session.last_event_ms, label
            )
            session.last_event_ms = now
            signal = self._update_signal(session, now, entry.duration_ms, step=label)
            self._emit(signal)
            return signal

    def ledger_snapshot(self) -> LedgerSnapshot:
        """Frozen copy of the current build's timeline.

        Raises
        ------
        EngineNotStartedError
            If no build is being tracked.
        """
        with self._lock:
            session = self._require_session()
            return session.ledger.snapshot(session.start_ms, session.page_estimate.value)

    # ------------------------------------------------------------------
    # Event application
    # ------------------------------------------------------------------

    def _apply(self, session: BuildSession, event: StageEvent) -> None:
        if isinstance(event, StageStarted):
            self._start_stage(session, event)
        elif isinstance(event, PageCompleted):
            self._complete_page(session, event.page)

    def _start_stage(self, session: BuildSession, event: StageStarted) -> None:
        now = self._now_ms()
        session.stage_number += 1
        session.stage_name = event.name
        session.produces_pages = event.produces_pages
        session.stage_started_ms = now

        key = session.stage_key
        session.ledger.open_stage(key)
        session.ledger.record_wait(key, now, now - session.last_event_ms)
        session.last_event_ms = now

        logger.info("Stage %s started (produces pages: %s)", key, event.produces_pages)
        self._emit(
            ResetSignal(
                timestamp_ms=now,
                stage_number=session.stage_number,
                stage_name=session.stage_name,
                produces_pages=session.produces_pages,
            )
        )

    def _complete_page(self, session: BuildSession, page: int) -> None:
        now = self._now_ms()
        key = session.stage_key

        if not session.ledger.has_page(key, page):
            session.page_estimate.infer(session.ledger.page_count(key) + 1)

        entry, revisited = session.ledger.record_page(
            key, page, now, now - session.last_event_ms
        )
        session.last_event_ms = now

        logger.debug(
            "Stage %s page %d%s in %d ms",
            key,
            page,
            " (revisited)" if revisited else "",
            entry.duration_ms,
        )
        self._emit(self._update_signal(session, now, entry.duration_ms, page=page))

    def _update_signal(
        self,
        session: BuildSession,
        now: int,
        elapsed_ms: int,
        *,
        page: int | None = None,
        step: str | None = None,
    ) -> UpdateSignal:
        return UpdateSignal(
            timestamp_ms=now,
            stage_number=session.stage_number,
            stage_name=session.stage_name,
            produces_pages=session.produces_pages,
            page=page,
            step=step,
            elapsed_ms=elapsed_ms,
            stage_elapsed_ms=now - session.stage_started_ms,
            page_total=session.page_estimate.value,
        )

    def _emit(self, signal: ProgressSignal) -> None:
        report = self.dispatcher.dispatch(signal)
        if report.dropped:
            self._dropped_signals += 1
            logger.error(
                "No sink accepted %s signal (failed: %s); continuing",
                signal.kind.value,
                ", ".join(report.failed),
            )
