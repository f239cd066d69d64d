"""Timing ledger entry models.

Each stage of a build owns an ordered list of ``LedgerEntry`` records.
An entry is a tagged record rather than an encoded string label, so a
page can be found and replaced without parsing.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class EntryKind(str, Enum):
    """What a ledger entry measures."""

    WAIT = "wait"  # gap between the previous event and a stage start
    STEP = "step"  # a generic, unnumbered unit of work
    PAGE = "page"  # one numbered output page


class LedgerEntry(BaseModel):
    """One timed event within a stage."""

    model_config = ConfigDict(frozen=True)

    timestamp_ms: int
    kind: EntryKind
    duration_ms: int
    page: int | None = None
    label: str | None = None

    @model_validator(mode="after")
    def _page_matches_kind(self) -> LedgerEntry:
        if self.kind == EntryKind.PAGE and self.page is None:
            raise ValueError("PAGE entries require a page number")
        if self.kind != EntryKind.PAGE and self.page is not None:
            raise ValueError(f"{self.kind.value} entries cannot carry a page number")
        return self

    @property
    def display_label(self) -> str:
        if self.kind == EntryKind.PAGE:
            return f"Page {self.page}"
        if self.kind == EntryKind.WAIT:
            return "Wait Time"
        return self.label or "Step"


class StageTimeline(BaseModel):
    """Entries recorded for one stage, in insertion order."""

    model_config = ConfigDict(frozen=True)

    number: int
    name: str
    entries: list[LedgerEntry] = []

    @property
    def total_ms(self) -> int:
        return sum(e.duration_ms for e in self.entries)

    @property
    def page_count(self) -> int:
        return sum(1 for e in self.entries if e.kind == EntryKind.PAGE)


class LedgerSnapshot(BaseModel):
    """A frozen copy of the whole ledger, for detail views."""

    model_config = ConfigDict(frozen=True)

    build_start_ms: int
    page_total: int | None = None
    stages: list[StageTimeline] = []
