"""Fix application for context files.

Provides the batch engine that applies a set of fixes in one pass and the
interactive driver that offers them one at a time.
"""

from __future__ import annotations

from ctxlint.fixers.engine import (
    FixApplicationResult,
    apply_fixes,
    rebase_fix,
    sort_fixes,
)
from ctxlint.fixers.interactive import (
    FixDecision,
    InteractiveFixer,
    InteractiveFixResult,
    parse_decision,
)

__all__ = [
    # Batch engine
    "FixApplicationResult",
    "apply_fixes",
    "rebase_fix",
    "sort_fixes",
    # Interactive driver
    "FixDecision",
    "InteractiveFixer",
    "InteractiveFixResult",
    "parse_decision",
]
