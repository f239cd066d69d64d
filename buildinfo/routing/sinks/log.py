"""LoggingSink: writes notification-style progress messages to a logger."""

from __future__ import annotations

import logging

from buildinfo.models.signals import ProgressSignal
from buildinfo.monitor.status import format_progress_message


class LoggingSink:
    """Logs ``"Run 2, processing page 4/10"``-style text for every signal.

    Parameters
    ----------
    level:
        Log level for the messages.
    logger:
        Target logger.  Defaults to this module's logger.
    """

    def __init__(self, level: int = logging.INFO, logger: logging.Logger | None = None) -> None:
        self._level = level
        self._logger = logger or logging.getLogger(__name__)

    @property
    def sink_name(self) -> str:
        return "log"

    def accept(self, signal: ProgressSignal) -> None:
        self._logger.log(self._level, format_progress_message(signal))
