"""Enclosed-numeral icons used to label stage numbers in status text."""

from __future__ import annotations

from enum import Enum


class RunIconType(str, Enum):
    """Numeral families selectable through ``ProgressConfig.run_icon_type``."""

    PARENTHESISED = "Parenthesised"
    CIRCLED = "Circled"
    SOLID_CIRCLED = "Solid Circled"
    FULL_STOP = "Full Stop"


# Index n holds the glyph for stage n, 0..20.
_ENCLOSED_NUMBERS: dict[RunIconType, tuple[str, ...]] = {
    RunIconType.PARENTHESISED: tuple("⒪⑴⑵⑶⑷⑸⑹⑺⑻⑼⑽⑾⑿⒀⒁⒂⒃⒄⒅⒆⒇"),
    RunIconType.CIRCLED: tuple("⓪①②③④⑤⑥⑦⑧⑨⑩⑪⑫⑬⑭⑮⑯⑰⑱⑲⑳"),
    RunIconType.SOLID_CIRCLED: tuple("⓿❶❷❸❹❺❻❼❽❾❿⓫⓬⓭⓮⓯⓰⓱⓲⓳⓴"),
    RunIconType.FULL_STOP: ("0.",) + tuple("⒈⒉⒊⒋⒌⒍⒎⒏⒐⒑⒒⒓⒔⒕⒖⒗⒘⒙⒚⒛"),
}

MAX_ICON_NUMBER = 20


def run_icon(icon_type: RunIconType | str, number: int) -> str:
    """Return the enclosed numeral for *number*.

    Numbers outside 0..20 have no enclosed form and render as ``(n)``.
    Raises ``ValueError`` for an unknown icon type.
    """
    glyphs = _ENCLOSED_NUMBERS[RunIconType(icon_type)]
    if 0 <= number <= MAX_ICON_NUMBER:
        return glyphs[number]
    return f"({number})"
