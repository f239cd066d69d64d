"""Progress signals emitted to UI sinks, and classifier events.

Signals are discrete, in-process messages.  The integrating application
maps them onto whatever surface it has (status bar, notification,
terminal line).
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict


class SignalKind(str, Enum):
    RESET = "reset"
    UPDATE = "update"
    FINISHED = "finished"


class ProgressSignal(BaseModel):
    """Base fields shared by every signal."""

    model_config = ConfigDict(frozen=True)

    kind: SignalKind
    timestamp_ms: int


class ResetSignal(ProgressSignal):
    """A new stage has begun; any progress indicator restarts from zero."""

    kind: SignalKind = SignalKind.RESET
    stage_number: int
    stage_name: str
    produces_pages: bool | None = None


class UpdateSignal(ProgressSignal):
    """Page or generic-step progress within the current stage.

    ``elapsed_ms`` is the duration recorded for this unit (accumulated
    across repeat visits of the same page); ``stage_elapsed_ms`` is the
    time since the stage started.
    """

    kind: SignalKind = SignalKind.UPDATE
    stage_number: int
    stage_name: str
    produces_pages: bool | None = None
    page: int | None = None
    step: str | None = None
    elapsed_ms: int = 0
    stage_elapsed_ms: int = 0
    page_total: int | None = None

    @property
    def fraction(self) -> float | None:
        """Share of pages done, capped at 1, or None without a total."""
        if self.page is None or not self.page_total:
            return None
        return min(1.0, self.page / self.page_total)


class FinishedSignal(ProgressSignal):
    """The build session ended."""

    kind: SignalKind = SignalKind.FINISHED
    elapsed_ms: int

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed_ms / 1000


AnySignal = Union[ResetSignal, UpdateSignal, FinishedSignal]


# ---------------------------------------------------------------------------
# Classifier events
# ---------------------------------------------------------------------------


class StageStarted(BaseModel):
    """A tool invocation began.  ``produces_pages`` is None when unknown."""

    model_config = ConfigDict(frozen=True)

    name: str
    produces_pages: bool | None = None


class PageCompleted(BaseModel):
    """A numbered page marker was printed."""

    model_config = ConfigDict(frozen=True)

    page: int


StageEvent = Union[StageStarted, PageCompleted]
