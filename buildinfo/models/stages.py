"""Stage identity and tool-signature models.

A *stage* is one tool invocation inside the build (one pdflatex pass, one
bibtex run, ...).  The same tool can run several times, so a stage is keyed
by its 1-based position in the build plus its display name.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict


class StageKey(BaseModel):
    """Identifies one stage within a build session."""

    model_config = ConfigDict(frozen=True)

    number: int
    name: str

    def __str__(self) -> str:
        return f"{self.number}-{self.name}"


class ToolSignature(BaseModel):
    """A well-known tool banner and whether the tool emits page markers.

    ``pattern`` is matched against the *end* of the rolling window, so it
    is compiled with a ``\\Z`` anchor by ``compiled()``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    pattern: str
    produces_pages: bool

    def compiled(self) -> re.Pattern[str]:
        return re.compile(self.pattern + r"\Z")


# Rule names that latexmk announces but which have their own banner below.
# A generic "applying rule" line for one of these is ignored so the stage
# is counted once, when the banner appears.
HARDCODED_RULES_PAGE_PRODUCING: tuple[str, ...] = (
    "pdflatex",
    "pdftex",
    "lualatex",
    "xelatex",
)
HARDCODED_RULES_OTHER: tuple[str, ...] = ("sage",)
HARDCODED_RULE_NAMES: frozenset[str] = frozenset(
    HARDCODED_RULES_PAGE_PRODUCING + HARDCODED_RULES_OTHER
)


# Evaluated in order; the first match wins.
DEFAULT_TOOL_SIGNATURES: tuple[ToolSignature, ...] = (
    ToolSignature(
        name="pdfTeX",
        pattern=r"This is pdfTeX, Version [\d.-]+[^\n]*",
        produces_pages=True,
    ),
    ToolSignature(
        name="BibTeX",
        pattern=r'This is BibTeX[\w.\- ",()]+',
        produces_pages=False,
    ),
    ToolSignature(
        name="Biber",
        pattern=r'This is Biber[\w.\- ",()]+',
        produces_pages=False,
    ),
    ToolSignature(
        name="Sage",
        pattern=r'Processing Sage code for [\w.\- "]+\.\.\.',
        produces_pages=False,
    ),
    ToolSignature(
        name="LuaTeX",
        pattern=r"This is LuaTeX, Version [\d.]+[^\n]*",
        produces_pages=True,
    ),
    ToolSignature(
        name="LuaHBTeX",
        pattern=r"This is LuaHBTeX, Version [\d.]+[^\n]*",
        produces_pages=True,
    ),
    ToolSignature(
        name="XeTeX",
        pattern=r"This is XeTeX, Version [\d.-]+[^\n]*",
        produces_pages=True,
    ),
)
