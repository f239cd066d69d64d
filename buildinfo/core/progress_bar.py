"""Text progress bar rendering.

A bar is built from three glyph kinds: a *whole* glyph for every fully
completed cell, one *partial* glyph for the fractional remainder, and a
*blank* glyph for the rest.  Each style defines how finely the partial
cell is subdivided.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import NamedTuple


class BarStyle(str, Enum):
    """Glyph sets selectable through ``ProgressConfig.bar_style``."""

    NONE = "none"
    BLOCK_WIDTH = "Block Width"
    BLOCK_SHADING = "Block Shading"
    BLOCK_QUADRANTS = "Block Quadrants"


class GlyphSet(NamedTuple):
    whole: str
    partials: tuple[str, ...]  # index 0 is "nothing yet"
    blank: str


_GLYPH_SETS: dict[BarStyle, GlyphSet] = {
    BarStyle.NONE: GlyphSet(whole="", partials=("",), blank=""),
    BarStyle.BLOCK_WIDTH: GlyphSet(
        whole="█",
        partials=("", "▏", "▎", "▍", "▌", "▋", "▊", "▉", "█"),
        blank="░",
    ),
    BarStyle.BLOCK_SHADING: GlyphSet(
        whole="█",
        partials=("", "░", "▒", "▓"),
        blank="░",
    ),
    BarStyle.BLOCK_QUADRANTS: GlyphSet(
        whole="█",
        partials=("", "▖", "▚", "▙"),
        blank="░",
    ),
}


def glyph_set(style: BarStyle | str) -> GlyphSet:
    """Return the glyphs for *style*.

    Raises ``ValueError`` for an unknown style name.
    """
    return _GLYPH_SETS[BarStyle(style)]


def render_progress_bar(fraction: float, width: int, style: BarStyle | str) -> str:
    """Render *fraction* (0..1) as a bar at most *width* cells wide.

    Callers are expected to keep *fraction* within [0, 1].

    >>> render_progress_bar(0.5, 4, "Block Width")
    '██░░'
    """
    glyphs = glyph_set(style)
    exact = width * fraction
    whole_count = min(width, math.floor(exact))

    steps = len(glyphs.partials) - 1
    # Halves round up.
    partial = glyphs.partials[math.floor((exact - whole_count) * steps + 0.5)] if steps else ""
    blank_count = max(0, width - whole_count - len(partial))

    return glyphs.whole * whole_count + partial + glyphs.blank * blank_count
