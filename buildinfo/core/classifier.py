"""Stage classifier: recognises stage starts and page markers in build output.

The classifier looks only at the *end* of the rolling window, so each
pattern fires once, on the line that completes it.  Three signal classes
are tried in a fixed precedence:

1. Page marker ``[N...]``, only while the current stage is known to
   produce pages.
2. Generic ``Latexmk: applying rule '<name>'...`` line.  Rules that have a
   dedicated banner in the signature table are ignored here so the stage
   is not counted twice.
3. The ordered table of tool banners (``DEFAULT_TOOL_SIGNATURES``).

The classifier is stateless; the caller supplies whether the current
stage produces pages.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from buildinfo.models.signals import PageCompleted, StageEvent, StageStarted
from buildinfo.models.stages import (
    DEFAULT_TOOL_SIGNATURES,
    HARDCODED_RULE_NAMES,
    ToolSignature,
)

logger = logging.getLogger(__name__)

PAGE_NUMBER_PATTERN = re.compile(r"\[(\d+)[^\[\]]*\]\Z")
LATEXMK_RULE_PATTERN = re.compile(r"Latexmk: applying rule '([A-Za-z\s/]+)'\.\.\.\n\Z")


class StageClassifier:
    """Classifies the tail of a text window into at most one event.

    Parameters
    ----------
    signatures:
        Ordered tool banners.  Defaults to ``DEFAULT_TOOL_SIGNATURES``.
    reserved_rules:
        latexmk rule names owned by a banner in *signatures*.  Defaults to
        ``HARDCODED_RULE_NAMES``.
    """

    def __init__(
        self,
        signatures: Iterable[ToolSignature] | None = None,
        reserved_rules: Iterable[str] | None = None,
    ) -> None:
        self._signatures: tuple[ToolSignature, ...] = tuple(
            signatures if signatures is not None else DEFAULT_TOOL_SIGNATURES
        )
        self._compiled = [(sig, sig.compiled()) for sig in self._signatures]
        self._reserved = frozenset(
            reserved_rules if reserved_rules is not None else HARDCODED_RULE_NAMES
        )

    @property
    def signatures(self) -> tuple[ToolSignature, ...]:
        return self._signatures

    def classify(self, window: str, produces_pages: bool | None) -> StageEvent | None:
        """Return the event completed by the tail of *window*, if any."""
        if produces_pages is True:
            match = PAGE_NUMBER_PATTERN.search(window)
            if match:
                return self._page_event(match.group(1))

        match = LATEXMK_RULE_PATTERN.search(window)
        if match:
            rule_name = match.group(1)
            if rule_name in self._reserved:
                logger.debug("Deferring latexmk rule %r to its tool banner", rule_name)
                return None
            return StageStarted(name=rule_name, produces_pages=None)

        for signature, pattern in self._compiled:
            if pattern.search(window):
                return StageStarted(
                    name=signature.name,
                    produces_pages=signature.produces_pages,
                )

        return None

    @staticmethod
    def _page_event(digits: str) -> PageCompleted | None:
        # A marker that does not parse is dropped.
        try:
            page = int(digits)
        except ValueError:
            logger.debug("Ignoring unparseable page marker %r", digits)
            return None
        return PageCompleted(page=page)
