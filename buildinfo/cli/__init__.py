"""buildinfo CLI: Typer-based command-line interface.

Provides the ``buildinfo`` command with subcommands for replaying a build
log through the progress engine, rendering bars, and listing the
recognised tool banners.

All output uses Rich for formatted terminal display.
"""
