"""Markdown format checks with automatic fixes."""

from __future__ import annotations

import re
from collections.abc import Sequence

from ctxlint.document import Document
from ctxlint.markdown import MarkdownScanner
from ctxlint.model import Fix, Severity, Violation
from ctxlint.rules.base import FixableRule

MAX_CONSECUTIVE_EMPTY = 2

HEADER_SPACE_MESSAGE = "Header missing space after"
EMPTY_LINES_MESSAGE = "Too many consecutive empty lines"
TRAILING_WHITESPACE_MESSAGE = "Line has trailing whitespace"
FINAL_NEWLINE_MESSAGE = "File should end with a newline"

VALID_LANGUAGES = frozenset(
    {
        "bash", "sh", "shell", "javascript", "js", "typescript", "ts",
        "python", "py", "java", "c", "cpp", "csharp", "c#", "go", "rust",
        "php", "ruby", "swift", "kotlin", "html", "css", "scss", "sass",
        "less", "json", "xml", "yaml", "yml", "toml", "sql", "dockerfile",
        "makefile", "markdown", "md", "text", "txt",
    }
)


class FormatRule(FixableRule):
    """Markdown format validation for proper syntax and style."""

    id = "format"
    description = "Markdown format validation for proper syntax and style"

    _HEADER_PATTERN = re.compile(r"^(#{1,6})(.*)$")
    _LIST_MARKER_PATTERN = re.compile(r"^\s*([-*+]|\d+[.)])\s+")

    def evaluate(self, document: Document) -> list[Violation]:
        if not document.content.strip():
            return []

        violations: list[Violation] = []
        violations.extend(self._check_headers(document))
        violations.extend(self._check_empty_lines(document))
        violations.extend(self._check_trailing_whitespace(document))
        violations.extend(self._check_code_blocks(document))
        violations.extend(self._check_list_markers(document))
        violations.extend(self._check_end_of_file(document))
        return violations

    # -------------------------------------------------------------------------
    # Checks
    # -------------------------------------------------------------------------

    def _check_headers(self, document: Document) -> list[Violation]:
        violations: list[Violation] = []
        for number, line in MarkdownScanner.iter_live_lines(document.lines):
            match = self._HEADER_PATTERN.match(line)
            if match is None:
                continue
            hashes, rest = match.groups()
            if rest and not rest.startswith(" "):
                violations.append(
                    self.violation(
                        f"{HEADER_SPACE_MESSAGE} {hashes}",
                        Severity.ERROR,
                        number,
                        len(hashes) + 1,
                    )
                )
        return violations

    def _check_empty_lines(self, document: Document) -> list[Violation]:
        violations: list[Violation] = []
        consecutive = 0
        run_start = 0
        for index, line in enumerate(document.lines):
            if not line.strip():
                if consecutive == 0:
                    run_start = index
                consecutive += 1
                continue
            if consecutive > MAX_CONSECUTIVE_EMPTY:
                violations.append(
                    self.violation(
                        f"{EMPTY_LINES_MESSAGE} ({consecutive}), "
                        f"maximum {MAX_CONSECUTIVE_EMPTY} allowed",
                        Severity.WARNING,
                        run_start + 1,
                        1,
                    )
                )
            consecutive = 0
        return violations

    def _check_trailing_whitespace(self, document: Document) -> list[Violation]:
        violations: list[Violation] = []
        for index, line in enumerate(document.lines):
            stripped = line.rstrip()
            if line and line != stripped:
                violations.append(
                    self.violation(
                        TRAILING_WHITESPACE_MESSAGE,
                        Severity.WARNING,
                        index + 1,
                        len(stripped) + 1,
                    )
                )
        return violations

    def _check_code_blocks(self, document: Document) -> list[Violation]:
        violations: list[Violation] = []
        open_fence: str | None = None
        open_line = 0
        for index, line in enumerate(document.lines):
            delimiter = MarkdownScanner.fence_delimiter(line)
            if delimiter is None:
                continue
            if open_fence is None:
                open_fence = delimiter
                open_line = index + 1
                offset = line.index(delimiter) + len(delimiter)
                language = line[offset:].strip().lower()
                if language and language not in VALID_LANGUAGES:
                    violations.append(
                        self.violation(
                            f'Unknown code block language: "{language}"',
                            Severity.INFO,
                            index + 1,
                            offset + 1,
                        )
                    )
            elif delimiter == open_fence:
                open_fence = None

        if open_fence is not None:
            violations.append(
                self.violation("Unclosed code block", Severity.ERROR, open_line, 1)
            )
        return violations

    def _check_list_markers(self, document: Document) -> list[Violation]:
        markers: list[str] = []
        for _, line in MarkdownScanner.iter_live_lines(document.lines):
            match = self._LIST_MARKER_PATTERN.match(line)
            if match is None:
                continue
            marker = match.group(1)
            if marker[0].isdigit() or marker in markers:
                continue
            markers.append(marker)

        if len(markers) > 1:
            return [
                self.violation(
                    f"Inconsistent list markers found: {', '.join(markers)}. "
                    "Use consistent markers throughout.",
                    Severity.WARNING,
                    1,
                    1,
                )
            ]
        return []

    def _check_end_of_file(self, document: Document) -> list[Violation]:
        if document.content and not document.content.endswith("\n"):
            last_line = document.lines[-1]
            return [
                self.violation(
                    FINAL_NEWLINE_MESSAGE,
                    Severity.WARNING,
                    document.line_count,
                    len(last_line) + 1,
                )
            ]
        return []

    # -------------------------------------------------------------------------
    # Fixes
    # -------------------------------------------------------------------------

    def generate_fixes(self, violations: Sequence[Violation], content: str) -> list[Fix]:
        lines = content.split("\n")
        fixes: list[Fix] = []
        for violation in violations:
            if violation.rule_id != self.id:
                continue
            fix = self._fix_for(violation, lines)
            if fix is not None:
                fixes.append(fix)
        return fixes

    def _fix_for(self, violation: Violation, lines: list[str]) -> Fix | None:
        line_number = violation.location.line
        if line_number > len(lines):
            return None
        line = lines[line_number - 1]
        message = violation.message

        if message.startswith(HEADER_SPACE_MESSAGE):
            match = re.match(r"^(#+)([^#\s])", line)
            if match is None:
                return None
            column = len(match.group(1)) + 1
            return Fix.replace(
                (line_number, column), (line_number, column), " ", "Add space after header #"
            )

        if message.startswith(TRAILING_WHITESPACE_MESSAGE):
            stripped = line.rstrip()
            if stripped == line:
                return None
            return Fix.replace(
                (line_number, len(stripped) + 1),
                (line_number, len(line) + 1),
                "",
                "Remove trailing whitespace",
            )

        if message.startswith(EMPTY_LINES_MESSAGE):
            run = 0
            while line_number - 1 + run < len(lines) and not lines[line_number - 1 + run].strip():
                run += 1
            extra = run - MAX_CONSECUTIVE_EMPTY
            if extra <= 0:
                return None
            return Fix.replace(
                (line_number, 1),
                (line_number + extra, 1),
                "",
                f"Remove {extra} extra empty line(s)",
            )

        if message.startswith(FINAL_NEWLINE_MESSAGE):
            if line_number != len(lines) or not line:
                return None
            return Fix.replace(
                (line_number, len(line) + 1),
                (line_number, len(line) + 1),
                "\n",
                "Add final newline",
            )

        return None
