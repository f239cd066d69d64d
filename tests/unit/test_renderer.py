"""Unit tests for the TimelineRenderer.

Tests Rich panel output, per-entry rows and the summary line.
"""

from __future__ import annotations

import pytest
from rich.console import Console
from rich.panel import Panel

from buildinfo.core.timing_ledger import TimingLedger
from buildinfo.models.ledger import EntryKind, LedgerSnapshot
from buildinfo.models.stages import StageKey
from buildinfo.monitor.renderer import _KIND_STYLES, TimelineRenderer, format_duration

# 2023-11-14 22:13:20 UTC
START_MS = 1_700_000_000_000


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_snapshot(page_total: int | None = 2) -> LedgerSnapshot:
    """Two pdfTeX passes around a BibTeX run."""
    ledger = TimingLedger()
    first = StageKey(number=1, name="pdfTeX")
    ledger.open_stage(first)
    ledger.record_wait(first, START_MS + 40, 40)
    ledger.record_page(first, 1, START_MS + 1240, 1200)
    ledger.record_page(first, 2, START_MS + 1540, 300)

    bib = StageKey(number=2, name="BibTeX")
    ledger.open_stage(bib)
    ledger.record_wait(bib, START_MS + 1600, 60)
    ledger.record_step(bib, START_MS + 1700, 100, "sorting")

    ledger.open_stage(StageKey(number=3, name="pdfTeX"))
    return ledger.snapshot(START_MS, page_total)


def _render(snapshot: LedgerSnapshot, **kwargs) -> str:
    console = Console(force_terminal=False, width=120)
    renderer = TimelineRenderer(console=console, **kwargs)
    with console.capture() as capture:
        renderer.print_timeline(snapshot)
    return capture.get()


# ---------------------------------------------------------------------------
# Test: formatting helpers
# ---------------------------------------------------------------------------


class TestFormatDuration:
    @pytest.mark.parametrize(
        ("duration_ms", "expected"),
        [(0, "0 ms"), (850, "850 ms"), (999, "999 ms"), (1000, "1.0 s"), (12345, "12.3 s")],
    )
    def test_format_duration(self, duration_ms: int, expected: str):
        assert format_duration(duration_ms) == expected

    def test_every_entry_kind_has_a_style(self):
        for kind in EntryKind:
            assert kind in _KIND_STYLES, f"Missing style for {kind}"


# ---------------------------------------------------------------------------
# Test: render timeline
# ---------------------------------------------------------------------------


class TestRenderTimeline:
    def test_render_returns_panel(self):
        assert isinstance(TimelineRenderer().render_timeline(_make_snapshot()), Panel)

    def test_rows_show_stages_and_entries(self):
        output = _render(_make_snapshot())
        assert "pdfTeX" in output
        assert "BibTeX" in output
        assert "Wait Time" in output
        assert "Page 1" in output
        assert "Page 2" in output
        assert "sorting" in output
        assert "1.2 s" in output
        assert "300 ms" in output

    def test_stage_icons_use_configured_family(self):
        output = _render(_make_snapshot(), icon_type="Solid Circled")
        assert "❶" in output
        assert "❸" in output

    def test_summary_line(self):
        output = _render(_make_snapshot())
        assert "Stages: 3" in output
        # 40 + 1200 + 300 + 60 + 100
        assert "Recorded: 1.7 s" in output
        assert "Pages: 2" in output

    def test_summary_without_page_total(self):
        output = _render(_make_snapshot(page_total=None))
        assert "Pages:" not in output

    def test_title_and_start_time(self):
        output = _render(_make_snapshot())
        assert "Build Timeline" in output
        assert "2023-11-14 22:13:20 UTC" in output

    def test_empty_snapshot(self):
        output = _render(LedgerSnapshot(build_start_ms=START_MS))
        assert "Stages: 0" in output
        assert "Recorded: 0 ms" in output
