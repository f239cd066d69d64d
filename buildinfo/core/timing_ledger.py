"""Per-stage timing ledger.

Append-mostly: entries are added in arrival order.  The single exception
is a page that is reported again within the same stage (a tool revisiting
an earlier page on a later internal pass): the earlier entry is removed and
its duration is folded into the new one, so each page appears at most once
per stage and carries its total processing time.
"""

from __future__ import annotations

from buildinfo.models.ledger import (
    EntryKind,
    LedgerEntry,
    LedgerSnapshot,
    StageTimeline,
)
from buildinfo.models.stages import StageKey


class UnknownStageError(KeyError):
    """Raised when recording into a stage that was never opened."""


class TimingLedger:
    """Ordered mapping of stage -> ordered timed entries."""

    def __init__(self) -> None:
        self._stages: dict[StageKey, list[LedgerEntry]] = {}

    # ------------------------------------------------------------------
    # Stage management
    # ------------------------------------------------------------------

    def open_stage(self, key: StageKey) -> None:
        """Start an empty entry list for *key*.

        Raises ``ValueError`` if the key already exists; stage numbers only
        ever grow within a session.
        """
        if key in self._stages:
            raise ValueError(f"Stage {key} is already open")
        self._stages[key] = []

    @property
    def stage_keys(self) -> list[StageKey]:
        return list(self._stages)

    def entries(self, key: StageKey) -> list[LedgerEntry]:
        """Return a copy of the entries recorded for *key*."""
        return list(self._entries(key))

    def _entries(self, key: StageKey) -> list[LedgerEntry]:
        try:
            return self._stages[key]
        except KeyError:
            raise UnknownStageError(f"Stage {key} has not been opened") from None

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record_wait(self, key: StageKey, timestamp_ms: int, duration_ms: int) -> LedgerEntry:
        entry = LedgerEntry(
            timestamp_ms=timestamp_ms, kind=EntryKind.WAIT, duration_ms=duration_ms
        )
        self._entries(key).append(entry)
        return entry

    def record_step(
        self, key: StageKey, timestamp_ms: int, duration_ms: int, label: str
    ) -> LedgerEntry:
        entry = LedgerEntry(
            timestamp_ms=timestamp_ms,
            kind=EntryKind.STEP,
            duration_ms=duration_ms,
            label=label,
        )
        self._entries(key).append(entry)
        return entry

    def record_page(
        self, key: StageKey, page: int, timestamp_ms: int, duration_ms: int
    ) -> tuple[LedgerEntry, bool]:
        """Record *page*, folding in any earlier entry for the same page.

        Returns ``(entry, revisited)`` where *revisited* is True when an
        earlier entry for this page was replaced.  The stored duration is
        ``duration_ms`` plus the replaced entry's duration.
        """
        entries = self._entries(key)
        previous = self._pop_page(entries, page)
        extra = previous.duration_ms if previous is not None else 0
        entry = LedgerEntry(
            timestamp_ms=timestamp_ms,
            kind=EntryKind.PAGE,
            page=page,
            duration_ms=duration_ms + extra,
        )
        entries.append(entry)
        return entry, previous is not None

    @staticmethod
    def _pop_page(entries: list[LedgerEntry], page: int) -> LedgerEntry | None:
        for index, entry in enumerate(entries):
            if entry.kind == EntryKind.PAGE and entry.page == page:
                return entries.pop(index)
        return None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_page(self, key: StageKey, page: int) -> LedgerEntry | None:
        for entry in self._entries(key):
            if entry.kind == EntryKind.PAGE and entry.page == page:
                return entry
        return None

    def has_page(self, key: StageKey, page: int) -> bool:
        return self.find_page(key, page) is not None

    def page_count(self, key: StageKey) -> int:
        """Number of distinct pages recorded for *key*."""
        return sum(1 for e in self._entries(key) if e.kind == EntryKind.PAGE)

    def stage_total_ms(self, key: StageKey) -> int:
        return sum(e.duration_ms for e in self._entries(key))

    def snapshot(self, build_start_ms: int, page_total: int | None = None) -> LedgerSnapshot:
        return LedgerSnapshot(
            build_start_ms=build_start_ms,
            page_total=page_total,
            stages=[
                StageTimeline(number=key.number, name=key.name, entries=list(entries))
                for key, entries in self._stages.items()
            ],
        )

    def __len__(self) -> int:
        return len(self._stages)

    def __contains__(self, key: object) -> bool:
        return key in self._stages
