"""``buildinfo watch [LOG_FILE]``: track progress of build output.

Reads build output from a log file, or from stdin when no file is given
(``latexmk -pdf doc.tex | buildinfo watch``), feeds it through the
progress engine line by line and prints a status line for every signal.
"""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

import typer
from rich.console import Console

from buildinfo.config import ProgressConfig
from buildinfo.core.controller import SessionController
from buildinfo.core.progress_bar import BarStyle
from buildinfo.monitor.renderer import TimelineRenderer
from buildinfo.routing.sinks.log import LoggingSink
from buildinfo.routing.sinks.status_line import StatusLineSink

console = Console()


def _open_input(log_file: Optional[Path]) -> TextIO:
    """Open the log file, or stdin, decoding invalid UTF-8 as U+FFFD."""
    if log_file is not None:
        return log_file.open(encoding="utf-8", errors="replace")
    if isinstance(sys.stdin, io.TextIOWrapper):
        sys.stdin.reconfigure(encoding="utf-8", errors="replace")
    return sys.stdin


def watch_cmd(
    log_file: Optional[Path] = typer.Argument(
        None,
        help="Build log to replay. Reads stdin when omitted.",
        exists=True,
        dir_okay=False,
    ),
    pages: Optional[int] = typer.Option(
        None,
        "--pages",
        "-p",
        min=0,
        help="Authoritative total page count, if already known.",
    ),
    style: Optional[BarStyle] = typer.Option(
        None,
        "--style",
        "-s",
        help="Progress bar glyph style (defaults to BUILDINFO_BAR_STYLE).",
    ),
    width: Optional[int] = typer.Option(
        None,
        "--width",
        "-w",
        min=0,
        help="Progress bar width in cells (defaults to BUILDINFO_BAR_LENGTH).",
    ),
    timeline: bool = typer.Option(
        False,
        "--timeline",
        "-t",
        help="Print the per-stage timing table when the build ends.",
    ),
) -> None:
    """Track stage and page progress of a build log."""
    overrides: dict[str, object] = {}
    if style is not None:
        overrides["bar_style"] = style
    if width is not None:
        overrides["bar_length"] = width
    config = ProgressConfig(**overrides)

    if not config.enabled:
        console.print("[yellow]Progress tracking is disabled (BUILDINFO_ENABLED=false).[/yellow]")
        raise typer.Exit(code=0)

    controller = SessionController(
        config, sinks=[StatusLineSink(console, config), LoggingSink(logging.DEBUG)]
    )
    controller.start()
    if pages is not None:
        controller.set_page_total(pages)

    stream = _open_input(log_file)
    try:
        for line in stream:
            controller.append_output(line)
    except KeyboardInterrupt:
        console.print("[dim]Interrupted.[/dim]")
    finally:
        if log_file:
            stream.close()

    snapshot = controller.ledger_snapshot()
    controller.end()

    if timeline:
        console.print()
        TimelineRenderer(console, config.run_icon_type).print_timeline(snapshot)
