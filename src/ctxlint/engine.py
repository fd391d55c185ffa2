"""Rules engine for running every registered rule over a document.

Provides a unified interface to run rules, aggregate their violations and
collect fixes from the rules that can produce them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ctxlint.config import CtxlintConfig
from ctxlint.document import Document
from ctxlint.model import Fix, Severity, Violation, highest_severity
from ctxlint.rules.base import FixableRule, RuleRegistry
from ctxlint.rules.file_size import FileSizeRule
from ctxlint.rules.format_rule import FormatRule
from ctxlint.rules.import_resolution import ImportResolutionRule


@dataclass
class LintResult:
    """Violations found in one document.

    Attributes:
        document: The document that was linted.
        violations: Violations in rule registration order.
    """

    document: Document
    violations: list[Violation] = field(default_factory=list)

    @property
    def errors(self) -> int:
        return self._count(Severity.ERROR)

    @property
    def warnings(self) -> int:
        return self._count(Severity.WARNING)

    @property
    def infos(self) -> int:
        return self._count(Severity.INFO)

    @property
    def highest_severity(self) -> Severity:
        return highest_severity(v.severity for v in self.violations)

    def has_violations(self) -> bool:
        return bool(self.violations)

    def by_rule(self, rule_id: str) -> list[Violation]:
        return [v for v in self.violations if v.rule_id == rule_id]

    def by_severity(self, severity: Severity) -> list[Violation]:
        return [v for v in self.violations if v.severity is severity]

    def _count(self, severity: Severity) -> int:
        return len(self.by_severity(severity))


class RulesEngine:
    """Runs the rules of a registry and dispatches fix generation.

    Attributes:
        registry: The rules to run, in registration order.
    """

    def __init__(self, registry: RuleRegistry) -> None:
        self.registry = registry

    def lint(self, document: Document) -> LintResult:
        """Lint a document with all registered rules."""
        result = LintResult(document=document)
        for rule in self.registry:
            result.violations.extend(rule.evaluate(document))
        return result

    def generate_fixes(self, violations: Sequence[Violation], content: str) -> list[Fix]:
        """Collect fixes from fixable rules, keyed by each violation's rule id.

        Violations of rules that are not registered or not fixable produce
        no fix.

        Args:
            violations: Violations to fix.
            content: Text the violations were computed against.

        Returns:
            Fixes from every fixable rule, grouped by rule.
        """
        grouped: dict[str, list[Violation]] = {}
        for violation in violations:
            grouped.setdefault(violation.rule_id, []).append(violation)

        fixes: list[Fix] = []
        for rule_id, rule_violations in grouped.items():
            rule = self.registry.get(rule_id)
            if isinstance(rule, FixableRule):
                fixes.extend(rule.generate_fixes(rule_violations, content))
        return fixes


def create_default_registry(config: CtxlintConfig | None = None) -> RuleRegistry:
    """Create a registry holding the built-in rules.

    Args:
        config: Settings for rule thresholds and disabled rules.

    Returns:
        A RuleRegistry populated with every enabled built-in rule.
    """
    config = config or CtxlintConfig()
    registry = RuleRegistry(
        [
            FileSizeRule(config.max_size),
            FormatRule(),
            ImportResolutionRule(config.max_import_depth),
        ]
    )
    for rule_id in config.disabled_rules:
        registry.unregister(rule_id)
    return registry
