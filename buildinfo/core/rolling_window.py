"""Fixed-capacity window over the most recent lines of build output."""

from __future__ import annotations

from collections import deque

DEFAULT_WINDOW_LINES = 50


class RollingWindow:
    """Ring buffer of the last *capacity* lines.

    The window always holds exactly *capacity* lines; a fresh window is
    filled with empty lines so its text is ``capacity - 1`` newlines.  Every
    ``shift()`` drops the oldest line and appends the new one.

    Parameters
    ----------
    capacity:
        Number of lines kept.  Must be at least 1.
    """

    def __init__(self, capacity: int = DEFAULT_WINDOW_LINES) -> None:
        if capacity < 1:
            raise ValueError(f"Window capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._lines: deque[str] = deque([""] * capacity, maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def shift(self, line: str) -> None:
        self._lines.append(line)

    @property
    def text(self) -> str:
        """The window contents joined with newlines, oldest first."""
        return "\n".join(self._lines)

    def __len__(self) -> int:
        return len(self._lines)
