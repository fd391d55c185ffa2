"""Document size check."""

from __future__ import annotations

from ctxlint.document import Document
from ctxlint.model import Severity, Violation
from ctxlint.rules.base import BaseRule

DEFAULT_MAX_SIZE = 10000


class FileSizeRule(BaseRule):
    """Warn when a context file grows past its character budget.

    A document over `max_size` characters gets a warning; one over twice
    that gets an error.
    """

    id = "file-size"
    description = "Context files should stay within the character budget"

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.max_size = max_size

    def evaluate(self, document: Document) -> list[Violation]:
        size = document.character_count
        if size <= self.max_size:
            return []
        severity = Severity.ERROR if size > 2 * self.max_size else Severity.WARNING
        return [
            self.violation(
                f"File is {size} characters, exceeding the limit of {self.max_size}",
                severity,
                1,
                0,
            )
        ]
