"""Line-oriented Markdown scanning for context files.

Provides the small amount of Markdown awareness the rules need: fenced block
tracking, inline code span detection and import directive extraction. Uses
only regex (no external markdown libraries).
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from ctxlint.model import Location


@dataclass(frozen=True)
class ImportDirective:
    """An `@path` directive found in live (non-literal) text.

    Attributes:
        path: The path as written, without the leading `@`.
        location: Position of the `@` (1-indexed line and column).
    """

    path: str
    location: Location


class MarkdownScanner:
    """Scan Markdown lines for fences, code spans and import directives.

    All methods are static and stateless.
    """

    # Regex patterns
    _FENCE_PATTERN = re.compile(r"^\s*(```|~~~)")
    _DIRECTIVE_PATTERN = re.compile(r"@([A-Za-z0-9_.~/-]+)")

    @staticmethod
    def fence_delimiter(line: str) -> str | None:
        """Return the fence delimiter ("```" or "~~~") opening the line, if any."""
        match = MarkdownScanner._FENCE_PATTERN.match(line)
        return match.group(1) if match else None

    @staticmethod
    def iter_live_lines(lines: Sequence[str]) -> Iterator[tuple[int, str]]:
        """Yield (1-indexed line number, text) for lines outside fenced blocks.

        Fence lines themselves are never yielded. A block opened with one
        delimiter is only closed by the same delimiter.
        """
        open_fence: str | None = None
        for number, line in enumerate(lines, start=1):
            delimiter = MarkdownScanner.fence_delimiter(line)
            if delimiter is not None:
                if open_fence is None:
                    open_fence = delimiter
                    continue
                if delimiter == open_fence:
                    open_fence = None
                    continue
            if open_fence is None:
                yield number, line

    @staticmethod
    def is_in_code_span(line: str, position: int) -> bool:
        """Check whether a 0-indexed position sits inside an inline code span.

        A position is inside a span when an odd number of unescaped backticks
        precede it on the line.
        """
        in_span = False
        escape_next = False
        for char in line[:position]:
            if escape_next:
                escape_next = False
                continue
            if char == "\\":
                escape_next = True
                continue
            if char == "`":
                in_span = not in_span
        return in_span

    @staticmethod
    def extract_imports(lines: Sequence[str]) -> list[ImportDirective]:
        """Extract every live import directive from the given lines.

        Directives inside fenced blocks or inline code spans are inert and
        are not returned.

        Args:
            lines: Document lines.

        Returns:
            Directives in document order.
        """
        directives: list[ImportDirective] = []
        for number, line in MarkdownScanner.iter_live_lines(lines):
            for match in MarkdownScanner._DIRECTIVE_PATTERN.finditer(line):
                if MarkdownScanner.is_in_code_span(line, match.start()):
                    continue
                directives.append(
                    ImportDirective(
                        path=match.group(1),
                        location=Location(number, match.start() + 1),
                    )
                )
        return directives
