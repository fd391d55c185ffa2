"""Rules that check context files.

Provides the rule contract, the registry and the built-in rules.
"""

from __future__ import annotations

from ctxlint.rules.base import BaseRule, FixableRule, RuleRegistry
from ctxlint.rules.file_size import FileSizeRule
from ctxlint.rules.format_rule import FormatRule
from ctxlint.rules.import_resolution import (
    ImportEdge,
    ImportResolutionRule,
    ImportResolver,
    resolve_import_path,
)

__all__ = [
    # Base types
    "BaseRule",
    "FixableRule",
    "RuleRegistry",
    # Rules
    "FileSizeRule",
    "FormatRule",
    "ImportResolutionRule",
    # Import resolution
    "ImportEdge",
    "ImportResolver",
    "resolve_import_path",
]
