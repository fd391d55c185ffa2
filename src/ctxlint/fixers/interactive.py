"""Interactive, one-fix-at-a-time remediation.

Fixes are presented top to bottom. Each accepted fix is applied immediately
through the batch engine and the remaining fixes are re-based onto the new
text, so every preview reflects the document as it currently stands.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from rich.console import Console
from rich.text import Text

from ctxlint.document import Document
from ctxlint.fixers.engine import apply_fixes, rebase_fix, sort_fixes
from ctxlint.model import Fix, Violation

logger = logging.getLogger(__name__)

PromptFn = Callable[[str], str]
FixGenerator = Callable[[Sequence[Violation], str], list[Fix]]

PROMPT_QUESTION = "Apply this fix? [y]es / [n]o / [a]ll / [q]uit: "
_SEPARATOR = "━" * 47


class FixDecision(str, Enum):
    """Operator answer for a single fix."""

    ACCEPT = "accept"
    SKIP = "skip"
    ACCEPT_ALL = "accept-all"
    ABORT = "abort"


_DECISION_ALIASES: dict[str, FixDecision] = {
    "y": FixDecision.ACCEPT,
    "yes": FixDecision.ACCEPT,
    "accept": FixDecision.ACCEPT,
    "n": FixDecision.SKIP,
    "no": FixDecision.SKIP,
    "skip": FixDecision.SKIP,
    "a": FixDecision.ACCEPT_ALL,
    "all": FixDecision.ACCEPT_ALL,
    "accept-all": FixDecision.ACCEPT_ALL,
    "q": FixDecision.ABORT,
    "quit": FixDecision.ABORT,
    "abort": FixDecision.ABORT,
}


def parse_decision(response: str) -> FixDecision | None:
    """Normalize a free-form answer to a decision, or None if unrecognized."""
    return _DECISION_ALIASES.get(response.strip().lower())


@dataclass
class InteractiveFixResult:
    """Outcome of an interactive session.

    Attributes:
        document: Document after all accepted fixes.
        applied_count: Number of fixes applied.
        skipped_count: Number of fixes skipped, declined, unusable or left
            unprocessed after an abort.
        quit_early: Whether the operator aborted the session.
    """

    document: Document
    applied_count: int = 0
    skipped_count: int = 0
    quit_early: bool = False

    @property
    def fixed(self) -> bool:
        return self.applied_count > 0

    @property
    def content(self) -> str:
        return self.document.content


def _visualize_whitespace(line: str) -> str:
    stripped = line.rstrip(" ")
    return stripped + "·" * (len(line) - len(stripped))


class InteractiveFixer:
    """Step through fixes, asking the operator about each one.

    Attributes:
        console: Rich console receiving previews and status lines.
        context_lines: Lines of unchanged context shown around each fix.
    """

    def __init__(
        self,
        prompt_fn: PromptFn | None = None,
        console: Console | None = None,
        context_lines: int = 3,
    ) -> None:
        """Initialize the fixer.

        Args:
            prompt_fn: Called with the question, returns the raw answer.
                Defaults to reading a line through the console.
            console: Output console. Defaults to a stdout console.
            context_lines: Context lines around each preview.
        """
        self.console = console or Console()
        self.prompt_fn = prompt_fn or self.console.input
        self.context_lines = context_lines

    def fix(
        self,
        document: Document,
        violations: Sequence[Violation],
        fix_generator: FixGenerator,
    ) -> InteractiveFixResult:
        """Generate fixes for the violations and review them one by one."""
        fixes = fix_generator(violations, document.content)
        return self.review(document, fixes)

    def review(self, document: Document, fixes: Sequence[Fix]) -> InteractiveFixResult:
        """Review already-generated fixes in document order.

        Args:
            document: Document the fixes were computed against.
            fixes: Fixes to offer.

        Returns:
            InteractiveFixResult with the edited document and counts.
        """
        result = InteractiveFixResult(document=document)
        if not fixes:
            self.console.print("No fixes available.")
            return result

        pending: list[Fix | None] = list(sort_fixes(fixes))
        total = len(pending)
        apply_all = False
        self.console.print(f"\nFound {total} fixable issue(s)\n")

        for index in range(total):
            fix = pending[index]
            if fix is None:
                logger.warning("Fix %d/%d overlaps an earlier edit; skipping", index + 1, total)
                self.console.print("[yellow]![/yellow] Skipped (overlaps an applied fix)\n")
                result.skipped_count += 1
                continue

            if not apply_all:
                self._show_preview(result.document, fix, index + 1, total)
                decision = self._ask()
                if decision is FixDecision.SKIP:
                    result.skipped_count += 1
                    self.console.print("Skipped\n")
                    continue
                if decision is FixDecision.ABORT:
                    result.skipped_count += total - index
                    result.quit_early = True
                    self.console.print("\nQuit interactive mode\n")
                    break
                if decision is FixDecision.ACCEPT_ALL:
                    apply_all = True

            applied = apply_fixes(result.document, [fix])
            if not applied.fixed:
                result.skipped_count += 1
                self.console.print("[yellow]![/yellow] Could not apply fix\n")
                continue

            result.document = applied.document
            result.applied_count += 1
            self.console.print("[green]✓[/green] Applied\n")
            for later in range(index + 1, total):
                pending_fix = pending[later]
                if pending_fix is not None:
                    pending[later] = rebase_fix(pending_fix, fix)

        self._show_summary(result)
        return result

    def _ask(self) -> FixDecision:
        while True:
            decision = parse_decision(self.prompt_fn(PROMPT_QUESTION))
            if decision is not None:
                return decision
            self.console.print("Invalid choice. Please enter y, n, a, or q.")

    def _show_preview(self, document: Document, fix: Fix, current: int, total: int) -> None:
        lines = document.lines
        start_line = fix.span.start.line
        end_line = fix.span.end.line

        location = f"Line {start_line}" + (f"-{end_line}" if end_line != start_line else "")
        self.console.print(_SEPARATOR)
        self.console.print(Text(f"Fix {current}/{total}: {fix.description}"))
        self.console.print(f"Location: {location}")
        self.console.print(_SEPARATOR)

        context_start = max(0, start_line - 1 - self.context_lines)
        context_end = min(len(lines), end_line + self.context_lines)

        for i in range(context_start, min(start_line - 1, len(lines))):
            self.console.print(Text(f"  {i + 1:>4} │ {lines[i]}"))

        for i in range(start_line - 1, min(end_line, len(lines))):
            self.console.print(
                Text(f"- {i + 1:>4} │ {_visualize_whitespace(lines[i])}", style="red")
            )

        if fix.text:
            for offset, new_line in enumerate(fix.text.split("\n")):
                number = str(start_line) if offset == 0 else "+"
                self.console.print(
                    Text(f"+ {number:>4} │ {_visualize_whitespace(new_line)}", style="green")
                )

        for i in range(end_line, context_end):
            self.console.print(Text(f"  {i + 1:>4} │ {lines[i]}"))

        self.console.print("")

    def _show_summary(self, result: InteractiveFixResult) -> None:
        self.console.print(_SEPARATOR)
        self.console.print("Summary:")
        self.console.print(f"  Applied: {result.applied_count}")
        self.console.print(f"  Skipped: {result.skipped_count}")
        if result.quit_early:
            self.console.print("  Session ended early")
        self.console.print(_SEPARATOR)
