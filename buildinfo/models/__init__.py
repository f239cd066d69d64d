"""buildinfo data models. All Pydantic v2 and frozen."""

from buildinfo.models.ledger import (
    EntryKind,
    LedgerEntry,
    LedgerSnapshot,
    StageTimeline,
)
from buildinfo.models.signals import (
    AnySignal,
    FinishedSignal,
    PageCompleted,
    ProgressSignal,
    ResetSignal,
    SignalKind,
    StageEvent,
    StageStarted,
    UpdateSignal,
)
from buildinfo.models.stages import (
    DEFAULT_TOOL_SIGNATURES,
    HARDCODED_RULE_NAMES,
    StageKey,
    ToolSignature,
)

__all__ = [
    # stages
    "StageKey",
    "ToolSignature",
    "DEFAULT_TOOL_SIGNATURES",
    "HARDCODED_RULE_NAMES",
    # ledger
    "EntryKind",
    "LedgerEntry",
    "StageTimeline",
    "LedgerSnapshot",
    # signals
    "SignalKind",
    "ProgressSignal",
    "ResetSignal",
    "UpdateSignal",
    "FinishedSignal",
    "AnySignal",
    # classifier events
    "StageStarted",
    "PageCompleted",
    "StageEvent",
]
