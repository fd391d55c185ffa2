"""Tests for the rules engine and rule registry."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from ctxlint.config import CtxlintConfig
from ctxlint.document import Document
from ctxlint.engine import LintResult, RulesEngine, create_default_registry
from ctxlint.model import Fix, Location, Severity, Violation
from ctxlint.rules import BaseRule, FileSizeRule, FixableRule, FormatRule, RuleRegistry


class AlwaysWarns(BaseRule):
    """Rule that reports one warning on every document."""

    id = "always-warns"
    description = "Test rule"

    def evaluate(self, document: Document) -> list[Violation]:
        return [self.violation("Always", Severity.WARNING, 1, 0)]


class PrefixFixer(FixableRule):
    """Rule that wants every document to start with '>'."""

    id = "prefix"
    description = "Test fixable rule"

    def evaluate(self, document: Document) -> list[Violation]:
        if document.content.startswith(">"):
            return []
        return [self.violation("Missing prefix", Severity.ERROR, 1, 1)]

    def generate_fixes(self, violations: Sequence[Violation], content: str) -> list[Fix]:
        return [Fix.replace((1, 1), (1, 1), ">", "Add prefix") for _ in violations]


class Nameless(BaseRule):
    def evaluate(self, document: Document) -> list[Violation]:
        return []


class TestRuleRegistry:
    """Tests for RuleRegistry."""

    def test_register_and_get(self) -> None:
        """Test registering a rule and looking it up by id."""
        registry = RuleRegistry()
        rule = AlwaysWarns()
        registry.register(rule)
        assert registry.get("always-warns") is rule
        assert registry.has_rule("always-warns")
        assert len(registry) == 1

    def test_duplicate_rejected(self) -> None:
        """Test that registering the same id twice raises ValueError."""
        registry = RuleRegistry([AlwaysWarns()])
        with pytest.raises(ValueError, match="already registered"):
            registry.register(AlwaysWarns())

    def test_rule_without_id_rejected(self) -> None:
        """Test that a rule without an id raises ValueError."""
        with pytest.raises(ValueError, match="has no id defined"):
            RuleRegistry([Nameless()])

    def test_registration_order_kept(self) -> None:
        """Test that rule ids are listed in registration order."""
        registry = RuleRegistry([PrefixFixer(), AlwaysWarns()])
        assert registry.list_rule_ids() == ["prefix", "always-warns"]

    def test_unregister(self) -> None:
        """Test removing a rule from the registry."""
        registry = RuleRegistry([AlwaysWarns()])
        registry.unregister("always-warns")
        registry.unregister("unknown")
        assert not registry.has_rule("always-warns")

    def test_base_rule_is_abstract(self) -> None:
        """Test that BaseRule cannot be instantiated."""
        with pytest.raises(TypeError, match="abstract"):
            BaseRule()  # type: ignore[abstract]


class TestRulesEngine:
    """Tests for RulesEngine."""

    def test_lint_collects_all_rules(self) -> None:
        """Test that lint collects violations from every rule."""
        engine = RulesEngine(RuleRegistry([PrefixFixer(), AlwaysWarns()]))
        result = engine.lint(Document.from_text("text"))
        assert [v.rule_id for v in result.violations] == ["prefix", "always-warns"]
        assert result.errors == 1
        assert result.warnings == 1
        assert result.infos == 0
        assert result.highest_severity is Severity.ERROR

    def test_generate_fixes_dispatches_by_rule_id(self) -> None:
        """Test that fixes are generated by the rule that reported them."""
        engine = RulesEngine(RuleRegistry([PrefixFixer(), AlwaysWarns()]))
        result = engine.lint(Document.from_text("text"))
        fixes = engine.generate_fixes(result.violations, "text")
        assert fixes == [Fix.replace((1, 1), (1, 1), ">", "Add prefix")]

    def test_generate_fixes_ignores_unknown_rules(self) -> None:
        """Test that violations from unregistered rules produce no fixes."""
        engine = RulesEngine(RuleRegistry([PrefixFixer()]))
        stray = Violation("not-registered", "msg", Severity.ERROR, Location(1, 1))
        assert engine.generate_fixes([stray], "text") == []


class TestLintResult:
    """Tests for LintResult."""

    def test_empty(self) -> None:
        """Test an empty LintResult."""
        result = LintResult(document=Document.from_text(""))
        assert not result.has_violations()
        assert result.highest_severity is Severity.INFO

    def test_filters(self) -> None:
        """Test filtering violations by rule and severity."""
        info = Violation("a", "m", Severity.INFO, Location(1, 1))
        error = Violation("b", "m", Severity.ERROR, Location(2, 1))
        result = LintResult(document=Document.from_text("x\ny"), violations=[info, error])
        assert result.by_rule("a") == [info]
        assert result.by_severity(Severity.ERROR) == [error]
        assert result.infos == 1


class TestDefaultRegistry:
    """Tests for create_default_registry."""

    def test_builtin_rules(self) -> None:
        """Test that the default registry holds the built-in rules."""
        registry = create_default_registry()
        assert registry.list_rule_ids() == ["file-size", "format", "import-resolution"]

    def test_config_thresholds(self) -> None:
        """Test that config thresholds reach the rules."""
        registry = create_default_registry(CtxlintConfig(max_size=50, max_import_depth=2))
        file_size = registry.get("file-size")
        assert isinstance(file_size, FileSizeRule)
        assert file_size.max_size == 50

    def test_disabled_rules(self) -> None:
        """Test that disabled rules are left out."""
        registry = create_default_registry(CtxlintConfig(disabled_rules=["format"]))
        assert registry.list_rule_ids() == ["file-size", "import-resolution"]

    def test_format_rule_registered_as_fixable(self) -> None:
        """Test that the format rule is registered as fixable."""
        assert isinstance(create_default_registry().get("format"), FormatRule)


class TestFileSizeRule:
    """Tests for FileSizeRule."""

    def test_within_budget(self) -> None:
        """Test that a file at the limit passes."""
        assert FileSizeRule(10).evaluate(Document.from_text("x" * 10)) == []

    def test_over_budget_warns(self) -> None:
        """Test that a file over the limit gets a warning."""
        (violation,) = FileSizeRule(10).evaluate(Document.from_text("x" * 11))
        assert violation.severity is Severity.WARNING
        assert violation.location == Location(1, 0)

    def test_far_over_budget_errors(self) -> None:
        """Test that a file over twice the limit gets an error."""
        (violation,) = FileSizeRule(10).evaluate(Document.from_text("x" * 21))
        assert violation.severity is Severity.ERROR

    def test_invalid_budget(self) -> None:
        """Test that a non-positive limit raises ValueError."""
        with pytest.raises(ValueError, match="max_size"):
            FileSizeRule(0)
