"""``buildinfo bar FRACTION`` and ``buildinfo signatures``: inspection helpers."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from buildinfo.core.progress_bar import BarStyle, render_progress_bar
from buildinfo.models.stages import DEFAULT_TOOL_SIGNATURES, HARDCODED_RULE_NAMES

console = Console()


def bar_cmd(
    fraction: float = typer.Argument(..., min=0.0, max=1.0, help="Completion, 0 to 1."),
    width: int = typer.Option(12, "--width", "-w", min=0, help="Bar width in cells."),
    style: BarStyle = typer.Option(
        BarStyle.BLOCK_WIDTH, "--style", "-s", help="Glyph style."
    ),
) -> None:
    """Print a rendered progress bar."""
    console.print(Text(render_progress_bar(fraction, width, style)))


def signatures_cmd() -> None:
    """List the tool banners recognised as stage starts."""
    table = Table(title="Recognised tool banners", header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Tool", style="cyan")
    table.add_column("Pattern")
    table.add_column("Pages", justify="center")

    for index, signature in enumerate(DEFAULT_TOOL_SIGNATURES, start=1):
        pages = "[green]yes[/green]" if signature.produces_pages else "[dim]no[/dim]"
        table.add_row(str(index), signature.name, Text(signature.pattern), pages)

    console.print(table)
    console.print(
        "[dim]latexmk rules owned by a banner:[/dim] "
        + ", ".join(sorted(HARDCODED_RULE_NAMES))
    )
