"""Base classes for context file rules and the registry that holds them.

Provides the rule evaluation contract every check implements and the
fix-generation contract for rules that can repair what they report.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence

from ctxlint.document import Document
from ctxlint.model import Fix, Location, Severity, Violation


class BaseRule(ABC):
    """Abstract base class for all rules.

    Attributes:
        id: Unique rule identifier, used as the violation rule id.
        description: One-line description shown by `ctxlint rules`.
    """

    # Must be set by subclasses
    id: str = ""
    description: str = ""

    @abstractmethod
    def evaluate(self, document: Document) -> list[Violation]:
        """Check a document.

        Args:
            document: The document to check.

        Returns:
            Violations found, possibly empty.
        """

    @property
    def fixable(self) -> bool:
        return False

    def violation(self, message: str, severity: Severity, line: int, column: int) -> Violation:
        """Build a violation attributed to this rule."""
        return Violation(self.id, message, severity, Location(line, column))


class FixableRule(BaseRule):
    """A rule that can also propose fixes for its own violations."""

    @property
    def fixable(self) -> bool:
        return True

    @abstractmethod
    def generate_fixes(self, violations: Sequence[Violation], content: str) -> list[Fix]:
        """Turn this rule's violations into fixes.

        Fixers should be conservative: return no fix for a violation whose
        surrounding text no longer matches what the rule reported.

        Args:
            violations: Violations reported by this rule.
            content: The original text the violations were computed against.

        Returns:
            Fixes, in any order.
        """


class RuleRegistry:
    """Registry that maps rule ids to rule instances.

    Built once per lint invocation and passed to the engine explicitly.

    Example:
        >>> registry = RuleRegistry()
        >>> registry.register(FormatRule())
        >>> registry.get("format")
    """

    def __init__(self, rules: Sequence[BaseRule] = ()) -> None:
        """Initialize the registry, registering any rules given."""
        self._rules: dict[str, BaseRule] = {}
        for rule in rules:
            self.register(rule)

    def register(self, rule: BaseRule) -> None:
        """Register a rule instance by its id.

        Raises:
            ValueError: If the rule has no id or the id is already taken.
        """
        if not rule.id:
            raise ValueError(f"Rule class {type(rule).__name__} has no id defined")
        if rule.id in self._rules:
            raise ValueError(
                f"Rule '{rule.id}' already registered: {type(self._rules[rule.id]).__name__}"
            )
        self._rules[rule.id] = rule

    def unregister(self, rule_id: str) -> None:
        self._rules.pop(rule_id, None)

    def get(self, rule_id: str) -> BaseRule | None:
        return self._rules.get(rule_id)

    def has_rule(self, rule_id: str) -> bool:
        return rule_id in self._rules

    def list_rule_ids(self) -> list[str]:
        """List registered rule ids in registration order."""
        return list(self._rules)

    def __iter__(self) -> Iterator[BaseRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)
