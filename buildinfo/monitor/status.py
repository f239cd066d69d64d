"""Status-line text for progress signals.

Produces the short strings shown in a status bar or progress
notification.  Pure functions: the caller passes the glyph style, bar
width and icon family from its configuration.
"""

from __future__ import annotations

from buildinfo.core.progress_bar import BarStyle, render_progress_bar
from buildinfo.core.run_icons import RunIconType, run_icon
from buildinfo.models.signals import (
    FinishedSignal,
    ProgressSignal,
    ResetSignal,
    UpdateSignal,
)

DEFAULT_PAGE_FIELD_WIDTH = 6


def page_counter(page: int, total: int | None) -> str:
    """``"3"`` or ``"3/12"``."""
    return f"{page}/{total}" if total else str(page)


def format_status(
    signal: ProgressSignal,
    *,
    bar_style: BarStyle | str = BarStyle.BLOCK_WIDTH,
    bar_length: int = 12,
    icon_type: RunIconType | str = RunIconType.CIRCLED,
) -> str:
    """Return the status-bar text for *signal*.

    Stages that do not produce pages show their name; page-producing (or
    not yet known) stages show the page counter and, once a total is
    known, a progress bar.
    """
    if isinstance(signal, FinishedSignal):
        return f"( {signal.elapsed_seconds:.1f} s )"

    if not isinstance(signal, (ResetSignal, UpdateSignal)):
        raise TypeError(f"Unsupported signal type: {type(signal).__name__}")

    icon = run_icon(icon_type, signal.stage_number)
    if signal.produces_pages is False:
        return f"{icon} {signal.stage_name}"

    page = signal.page if isinstance(signal, UpdateSignal) and signal.page is not None else 0
    total = signal.page_total if isinstance(signal, UpdateSignal) else None

    field_width = len(str(total)) * 2 + 2 if total else DEFAULT_PAGE_FIELD_WIDTH
    counter = page_counter(page, total).ljust(field_width)
    bar = (
        render_progress_bar(min(1.0, page / total), bar_length, bar_style)
        if total
        else ""
    )
    return f"{icon}, Page {counter} {bar}"


def format_progress_message(signal: ProgressSignal) -> str:
    """Notification-style message, e.g. ``"Run 2, processing page 4/10"``."""
    if isinstance(signal, FinishedSignal):
        return f"Finished in {signal.elapsed_seconds:.1f} s"

    if not isinstance(signal, (ResetSignal, UpdateSignal)):
        raise TypeError(f"Unsupported signal type: {type(signal).__name__}")

    if signal.produces_pages is False:
        return f"Run {signal.stage_number}, {signal.stage_name}"

    if isinstance(signal, UpdateSignal) and signal.step is not None:
        return f"Run {signal.stage_number}, {signal.step}"

    page = signal.page if isinstance(signal, UpdateSignal) and signal.page is not None else 0
    total = signal.page_total if isinstance(signal, UpdateSignal) else None
    return f"Run {signal.stage_number}, processing page {page_counter(page, total)}"
