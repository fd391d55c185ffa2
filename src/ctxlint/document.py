"""Immutable document snapshots and the loader that produces them."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

LoadErrorKind = Literal["not_found", "read_error"]


class DocumentLoadError(Exception):
    """Raised when a document cannot be read from disk.

    Attributes:
        path: Path that was being loaded.
        kind: "not_found" if the path does not exist, "read_error" otherwise.
    """

    def __init__(self, path: Path, kind: LoadErrorKind, reason: str) -> None:
        self.path = path
        self.kind = kind
        super().__init__(f"Failed to read file {path}: {reason}")


@dataclass(frozen=True)
class Document:
    """A read-only snapshot of a file's text.

    Attributes:
        path: Absolute path of the file the text came from.
        content: Full text of the file.
        lines: The text split on newlines. Always holds at least one entry.
    """

    path: Path
    content: str
    lines: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.content.split("\n")))

    @classmethod
    def from_text(cls, content: str, path: str | Path = "CLAUDE.md") -> Document:
        """Build a document from literal text."""
        return cls(Path(path).absolute(), content)

    @classmethod
    def load(cls, path: str | Path) -> Document:
        """Read a document from disk as UTF-8 text.

        Raises:
            DocumentLoadError: If the file is missing or cannot be decoded.
        """
        file_path = Path(path).absolute()
        try:
            content = file_path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise DocumentLoadError(file_path, "not_found", "file does not exist") from e
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(file_path, "read_error", str(e)) from e
        return cls(file_path, content)

    def with_content(self, content: str) -> Document:
        """Return a new document for the same path holding different text."""
        return Document(self.path, content)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def character_count(self) -> int:
        return len(self.content)

    def get_line(self, line_number: int) -> str:
        """Return the text of a 1-indexed line.

        Raises:
            IndexError: If the line number is outside the document.
        """
        if line_number <= 0:
            raise IndexError("Line number must be positive")
        if line_number > len(self.lines):
            raise IndexError(f"Line number {line_number} is out of range")
        return self.lines[line_number - 1]
