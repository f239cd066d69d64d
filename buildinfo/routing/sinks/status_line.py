"""StatusLineSink: prints a status line for every signal to a Rich console."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.text import Text

from buildinfo.config import ProgressConfig
from buildinfo.models.signals import ProgressSignal, SignalKind
from buildinfo.monitor.status import format_status

logger = logging.getLogger(__name__)

_KIND_STYLES: dict[SignalKind, str] = {
    SignalKind.RESET: "bold cyan",
    SignalKind.UPDATE: "",
    SignalKind.FINISHED: "bold green",
}


class StatusLineSink:
    """Renders signals as status-bar text.

    The last rendered line is kept in ``text`` so hosts that poll a
    status surface can read it.

    Parameters
    ----------
    console:
        Rich Console to print to.  A new one is created if not provided.
    config:
        Supplies bar style, bar length and icon family.
    echo:
        Print each line.  When False the sink only updates ``text``.
    """

    def __init__(
        self,
        console: Console | None = None,
        config: ProgressConfig | None = None,
        *,
        echo: bool = True,
    ) -> None:
        self.console = console or Console()
        self._config = config or ProgressConfig()
        self._echo = echo
        self.text = ""

    @property
    def sink_name(self) -> str:
        return "status_line"

    def accept(self, signal: ProgressSignal) -> None:
        self.text = format_status(
            signal,
            bar_style=self._config.bar_style,
            bar_length=self._config.bar_length,
            icon_type=self._config.run_icon_type,
        )
        if self._echo:
            self.console.print(Text(self.text, style=_KIND_STYLES.get(signal.kind, "")))
