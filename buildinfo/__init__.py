"""buildinfo: live stage and page progress for multi-stage document builds.

Watches the raw output of a build pipeline (latexmk driving pdfTeX,
BibTeX, Biber, ...) and turns it into progress signals:
  - which stage is running, numbered in order of appearance
  - which page the current stage just shipped, and an estimated total
  - how long each page and each stage took, kept in a timing ledger
  - text progress bars and status lines for whatever UI hosts the engine
"""

__version__ = "0.1.0"
__description__ = "Live stage and page progress for multi-stage document builds"

from buildinfo.core.controller import (
    EngineNotStartedError,
    SessionAlreadyActiveError,
    SessionController,
)
from buildinfo.core.classifier import StageClassifier
from buildinfo.core.progress_bar import BarStyle, render_progress_bar
from buildinfo.core.timing_ledger import TimingLedger

__all__ = [
    "SessionController",
    "StageClassifier",
    "TimingLedger",
    "BarStyle",
    "render_progress_bar",
    "EngineNotStartedError",
    "SessionAlreadyActiveError",
    "__version__",
]
