"""Core value types shared by the rules, the fix engine and the resolver.

All positions are 1-indexed for lines. Columns are 1-indexed as well, with
column 0 reserved for violations that apply to a whole line.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum


class InvalidValueError(ValueError):
    """Raised when a value type is constructed with invalid fields."""


class Severity(IntEnum):
    """Totally ordered violation severity."""

    INFO = 0
    WARNING = 1
    ERROR = 2

    def __str__(self) -> str:
        return self.name.lower()

    def is_at_least(self, minimum: Severity) -> bool:
        return self >= minimum

    @classmethod
    def from_name(cls, name: str) -> Severity:
        """Look up a severity by its case-insensitive name.

        Raises:
            InvalidValueError: If the name is not a known severity.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise InvalidValueError(f"Unknown severity: {name!r}") from None


def highest_severity(severities: Iterable[Severity]) -> Severity:
    """Return the highest severity in the collection, or INFO when empty."""
    return max(severities, default=Severity.INFO)


@dataclass(frozen=True, order=True)
class Location:
    """A (line, column) point in a document.

    Attributes:
        line: 1-indexed line number.
        column: 1-indexed column, or 0 for whole-line violations.
    """

    line: int
    column: int

    def __post_init__(self) -> None:
        if self.line <= 0:
            raise InvalidValueError("Line number must be positive")
        if self.column < 0:
            raise InvalidValueError("Column number must be non-negative")

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Span:
    """A contiguous region of a document, from start up to (not including) end."""

    start: Location
    end: Location

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidValueError(
                f"Span end {self.end} is before its start {self.start}"
            )

    @property
    def is_single_line(self) -> bool:
        return self.start.line == self.end.line

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class Violation:
    """A single rule failure.

    Attributes:
        rule_id: Identifier of the rule that reported the failure.
        message: Human-readable description.
        severity: Severity of the failure.
        location: Where in the document the failure was found.
    """

    rule_id: str
    message: str
    severity: Severity
    location: Location

    def __post_init__(self) -> None:
        if not self.rule_id.strip():
            raise InvalidValueError("Rule ID cannot be empty")
        if not self.message.strip():
            raise InvalidValueError("Message cannot be empty")

    def __str__(self) -> str:
        return f"{self.severity}: {self.message} at {self.location} [{self.rule_id}]"

    def to_dict(self) -> dict[str, str | int]:
        return {
            "ruleId": self.rule_id,
            "message": self.message,
            "severity": str(self.severity),
            "line": self.location.line,
            "column": self.location.column,
        }


@dataclass(frozen=True)
class Fix:
    """A proposed replacement of a span with new text.

    Attributes:
        span: Region of the document to replace.
        text: Replacement text (may be empty to delete, may contain newlines).
        description: Short human-readable summary of the edit.
    """

    span: Span
    text: str
    description: str

    @classmethod
    def replace(
        cls,
        start: tuple[int, int],
        end: tuple[int, int],
        text: str,
        description: str,
    ) -> Fix:
        """Build a fix from (line, column) tuples."""
        return cls(Span(Location(*start), Location(*end)), text, description)


# -----------------------------------------------------------------------------
# Non-raising constructors
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class ConstructionError:
    """Describes why a value could not be built.

    Attributes:
        type_name: Name of the value type that was being built.
        message: The validation failure.
    """

    type_name: str
    message: str


def try_location(line: int, column: int) -> Location | ConstructionError:
    """Build a Location, returning a ConstructionError instead of raising."""
    try:
        return Location(line, column)
    except InvalidValueError as e:
        return ConstructionError("Location", str(e))


def try_span(start: Location, end: Location) -> Span | ConstructionError:
    """Build a Span, returning a ConstructionError instead of raising."""
    try:
        return Span(start, end)
    except InvalidValueError as e:
        return ConstructionError("Span", str(e))


def try_violation(
    rule_id: str,
    message: str,
    severity: Severity,
    location: Location,
) -> Violation | ConstructionError:
    """Build a Violation, returning a ConstructionError instead of raising."""
    try:
        return Violation(rule_id, message, severity, location)
    except InvalidValueError as e:
        return ConstructionError("Violation", str(e))
