"""Rich renderer for a build's timing ledger.

Turns a ``LedgerSnapshot`` into a Rich panel with one table row per
stage entry: stage, entry label and duration.

Color scheme
------------
- dim     : WAIT entries
- green   : PAGE entries
- cyan    : STEP entries
"""

from __future__ import annotations

from datetime import datetime, timezone

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from buildinfo.core.run_icons import RunIconType, run_icon
from buildinfo.models.ledger import EntryKind, LedgerSnapshot

_KIND_STYLES: dict[EntryKind, str] = {
    EntryKind.WAIT: "dim",
    EntryKind.PAGE: "green",
    EntryKind.STEP: "cyan",
}


def format_duration(duration_ms: int) -> str:
    """``"850 ms"`` below one second, otherwise ``"1.2 s"``."""
    if duration_ms < 1000:
        return f"{duration_ms} ms"
    return f"{duration_ms / 1000:.1f} s"


class TimelineRenderer:
    """Renders ``LedgerSnapshot`` as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    icon_type:
        Numeral family used for the stage column.
    """

    def __init__(
        self,
        console: Console | None = None,
        icon_type: RunIconType | str = RunIconType.CIRCLED,
    ) -> None:
        self.console = console or Console()
        self._icon_type = RunIconType(icon_type)

    def render_timeline(self, snapshot: LedgerSnapshot) -> Panel:
        """Render a snapshot as a Panel containing the stage table."""
        table = self._build_table(snapshot)

        total_ms = sum(stage.total_ms for stage in snapshot.stages)
        summary_parts = [
            f"[bold]Stages:[/bold] {len(snapshot.stages)}",
            f"[bold]Recorded:[/bold] {format_duration(total_ms)}",
        ]
        if snapshot.page_total is not None:
            summary_parts.append(f"[bold]Pages:[/bold] {snapshot.page_total}")
        summary = "  |  ".join(summary_parts)

        started = datetime.fromtimestamp(snapshot.build_start_ms / 1000, tz=timezone.utc)
        return Panel(
            Group(table, Text(""), Text.from_markup(summary)),
            title="[bold]Build Timeline[/bold]",
            subtitle=f"Started: {started.strftime('%Y-%m-%d %H:%M:%S UTC')}",
            border_style="blue",
            padding=(1, 2),
        )

    def _build_table(self, snapshot: LedgerSnapshot) -> Table:
        table = Table(show_header=True, header_style="bold cyan", expand=True)
        table.add_column("Run", width=5, justify="right")
        table.add_column("Stage", min_width=12)
        table.add_column("Entry", min_width=12)
        table.add_column("Duration", justify="right", width=10)

        for stage in snapshot.stages:
            icon = run_icon(self._icon_type, stage.number)
            if not stage.entries:
                table.add_row(icon, stage.name, "[dim]-[/dim]", "[dim]-[/dim]")
                continue
            for index, entry in enumerate(stage.entries):
                style = _KIND_STYLES.get(entry.kind, "")
                table.add_row(
                    icon if index == 0 else "",
                    stage.name if index == 0 else "",
                    Text(entry.display_label, style=style),
                    format_duration(entry.duration_ms),
                )
        return table

    def print_timeline(self, snapshot: LedgerSnapshot) -> None:
        self.console.print(self.render_timeline(snapshot))
