"""Main Typer application: imports and registers all CLI commands.

Entry point: ``buildinfo`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from buildinfo.cli.commands.bar import bar_cmd, signatures_cmd
from buildinfo.cli.commands.watch import watch_cmd
from buildinfo.config import config

app = typer.Typer(
    name="buildinfo",
    help="buildinfo: live stage and page progress for document builds.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="watch", help="Track progress of a build log or stdin.")(watch_cmd)
app.command(name="bar", help="Render a progress bar for a fraction.")(bar_cmd)
app.command(name="signatures", help="List recognised tool banners.")(signatures_cmd)


@app.callback()
def configure_logging(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    """Install a Rich log handler at the configured level."""
    level = "DEBUG" if verbose else config.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
