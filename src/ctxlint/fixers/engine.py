"""Batch application of text fixes to a document.

Conflicting fixes are settled in document order first: the earlier fix wins.
The survivors are then applied from the end of the document toward the
beginning, so an edit never moves the coordinates of an edit still pending.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ctxlint.document import Document
from ctxlint.model import Fix, Location, Span

logger = logging.getLogger(__name__)


@dataclass
class FixApplicationResult:
    """Outcome of applying a set of fixes.

    Attributes:
        document: The new document (the original one when nothing applied).
        applied_fixes: Fixes that were applied, in the order they were
            applied (descending document order).
    """

    document: Document
    applied_fixes: list[Fix] = field(default_factory=list)

    @property
    def fixed(self) -> bool:
        return bool(self.applied_fixes)

    @property
    def content(self) -> str:
        return self.document.content


def _column_index(location: Location) -> int:
    """Convert a 1-indexed column (0 meaning line start) to a string index."""
    return max(location.column - 1, 0)


def _sort_key(fix: Fix) -> tuple[int, int, int, int]:
    start, end = fix.span.start, fix.span.end
    return (start.line, start.column, end.line, end.column)


def sort_fixes(fixes: Iterable[Fix], *, descending: bool = False) -> list[Fix]:
    """Sort fixes by span start, then span end."""
    return sorted(fixes, key=_sort_key, reverse=descending)


def _overlaps(earlier: Span, later: Span) -> bool:
    """Whether `later` (sorted after `earlier`) collides with it.

    Spans that only touch do not collide. Two spans starting at the same
    point always do, including zero-width insertions.
    """
    return later.start < earlier.end or later.start == earlier.start


def apply_fixes(document: Document, fixes: Iterable[Fix]) -> FixApplicationResult:
    """Apply every usable fix to a document.

    A fix is skipped (and logged) when it references a line outside the
    document, or when it overlaps a fix that comes before it in document
    order. Skipping one fix never prevents the others from being applied.

    Args:
        document: Document to fix. It is never modified.
        fixes: Fixes to apply, in any order.

    Returns:
        FixApplicationResult holding the new document and the applied fixes.
    """
    ordered = sort_fixes(fixes)
    if not ordered:
        return FixApplicationResult(document=document)

    lines = list(document.lines)
    selected: list[Fix] = []

    for fix in ordered:
        if fix.span.start.line > len(lines) or fix.span.end.line > len(lines):
            logger.warning(
                "Skipping fix %r: span %s is outside the document (%d lines)",
                fix.description,
                fix.span,
                len(lines),
            )
            continue

        if selected and _overlaps(selected[-1].span, fix.span):
            logger.warning(
                "Skipping fix %r: span %s overlaps fix %r",
                fix.description,
                fix.span,
                selected[-1].description,
            )
            continue

        selected.append(fix)

    if not selected:
        return FixApplicationResult(document=document)

    applied = selected[::-1]
    for fix in applied:
        start, end = fix.span.start, fix.span.end
        prefix = lines[start.line - 1][: _column_index(start)]
        suffix = lines[end.line - 1][_column_index(end) :]
        lines[start.line - 1 : end.line] = [prefix + fix.text + suffix]

    return FixApplicationResult(
        document=document.with_content("\n".join(lines)),
        applied_fixes=applied,
    )


# -----------------------------------------------------------------------------
# Re-basing
# -----------------------------------------------------------------------------


def _inserted_end(fix: Fix) -> Location:
    """Location just past the replacement text once the fix is applied."""
    start = fix.span.start
    parts = fix.text.split("\n")
    if len(parts) == 1:
        return Location(start.line, _column_index(start) + len(fix.text) + 1)
    return Location(start.line + len(parts) - 1, len(parts[-1]) + 1)


def _shift(point: Location, applied: Fix, new_end: Location) -> Location:
    old_end = applied.span.end
    if point.line == old_end.line:
        offset = _column_index(point) - _column_index(old_end)
        return Location(new_end.line, _column_index(new_end) + offset + 1)
    return Location(point.line + new_end.line - old_end.line, point.column)


def rebase_fix(fix: Fix, applied: Fix) -> Fix | None:
    """Translate a pending fix into coordinates valid after `applied` ran.

    Args:
        fix: A fix computed against the document before `applied`.
        applied: A fix that has just been applied.

    Returns:
        The translated fix, the same fix when it lies entirely before the
        applied edit, or None when the two spans overlap. Overlap is judged
        the same way as in apply_fixes.
    """
    applied_span = applied.span
    if fix.span.end <= applied_span.start and fix.span.start < applied_span.start:
        return fix
    if _overlaps(applied_span, fix.span):
        return None

    new_end = _inserted_end(applied)
    span = Span(
        _shift(fix.span.start, applied, new_end),
        _shift(fix.span.end, applied, new_end),
    )
    return Fix(span=span, text=fix.text, description=fix.description)
