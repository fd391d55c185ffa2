"""ctxlint CLI Tool - Main entry point."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ctxlint import __version__
from ctxlint.cli_utils import (
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    error,
    max_depth_option,
    max_size_option,
    resolve_path,
    success,
    warning,
    wire_config,
)
from ctxlint.document import Document, DocumentLoadError
from ctxlint.engine import LintResult, RulesEngine, create_default_registry
from ctxlint.fixers import InteractiveFixer, apply_fixes
from ctxlint.model import Severity

app = typer.Typer(
    name="ctxlint",
    help="ctxlint - Lint and fix Markdown context files.",
    add_completion=False,
)

# Rich consoles for output
console = Console()
err_console = Console(stderr=True)

SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "blue",
}


# -----------------------------------------------------------------------------
# Output Helpers
# -----------------------------------------------------------------------------


def _render_text(result: LintResult) -> None:
    """Print violations as a table followed by a summary line."""
    path = escape(str(result.document.path))
    if not result.has_violations():
        console.print(f"[green]✓[/green] No issues found in {path}")
        return

    table = Table(title=path, show_lines=False)
    table.add_column("Location", no_wrap=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Rule", no_wrap=True)
    table.add_column("Message")

    ordered = sorted(
        result.violations,
        key=lambda v: (-v.severity, v.location.line, v.location.column),
    )
    for violation in ordered:
        style = SEVERITY_STYLES[violation.severity]
        table.add_row(
            str(violation.location),
            f"[{style}]{violation.severity}[/{style}]",
            violation.rule_id,
            escape(violation.message),
        )

    console.print(table)
    console.print(
        f"{result.errors} error(s), {result.warnings} warning(s), {result.infos} info"
    )


def _render_json(result: LintResult, fixes_applied: int) -> None:
    payload: dict[str, Any] = {
        "file": str(result.document.path),
        "violations": [v.to_dict() for v in result.violations],
        "summary": {
            "errors": result.errors,
            "warnings": result.warnings,
            "infos": result.infos,
            "highestSeverity": str(result.highest_severity),
            "fixesApplied": fixes_applied,
        },
    }
    console.print_json(json.dumps(payload))


def _prompt(question: str) -> str:
    answer: str = typer.prompt(question, default="", show_default=False, prompt_suffix="")
    return answer


def _write_document(document: Document) -> None:
    try:
        document.path.write_text(document.content, encoding="utf-8")
    except OSError as e:
        error(f"Failed to write {document.path}: {e}", exit_code=EXIT_SYSTEM_ERROR)


# -----------------------------------------------------------------------------
# Version and Main Callbacks
# -----------------------------------------------------------------------------


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"ctxlint version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """ctxlint - Lint and fix Markdown context files."""
    pass


# -----------------------------------------------------------------------------
# Lint Command
# -----------------------------------------------------------------------------


@app.command()
def lint(
    file: str = typer.Argument(..., help="Path to the context file to lint."),
    output_format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format (text, json).",
    ),
    fix: bool = typer.Option(
        False,
        "--fix",
        help="Apply all available fixes and write the file back.",
    ),
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Review each available fix before applying it.",
    ),
    max_size: int | None = max_size_option(),
    max_depth: int | None = max_depth_option(),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log skipped fixes and unreadable imports.",
    ),
) -> None:
    """Lint a context file, optionally fixing what can be fixed.

    Exits with code 1 when error-severity violations remain.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if output_format not in ("text", "json"):
        error(f"Unknown output format: {output_format} (expected text or json)")
    if interactive and output_format == "json":
        error("--interactive cannot be combined with --format json")
    if interactive and fix:
        warning("--fix is ignored in interactive mode")

    path = resolve_path(file)
    config = wire_config(max_size=max_size, max_import_depth=max_depth, start_dir=path.parent)

    try:
        document = Document.load(path)
    except DocumentLoadError as e:
        error(str(e))

    engine = RulesEngine(create_default_registry(config))
    result = engine.lint(document)
    fixes_applied = 0

    if interactive:
        fixer = InteractiveFixer(
            prompt_fn=_prompt,
            console=console,
            context_lines=config.context_lines,
        )
        outcome = fixer.fix(document, result.violations, engine.generate_fixes)
        if outcome.fixed:
            _write_document(outcome.document)
            fixes_applied = outcome.applied_count
            result = engine.lint(outcome.document)
    elif fix:
        fixes = engine.generate_fixes(result.violations, document.content)
        applied = apply_fixes(document, fixes)
        if applied.fixed:
            _write_document(applied.document)
            fixes_applied = len(applied.applied_fixes)
            result = engine.lint(applied.document)

    if output_format == "json":
        _render_json(result, fixes_applied)
    else:
        if fixes_applied:
            success(f"Applied {fixes_applied} fix(es) to {path}")
        _render_text(result)

    if result.errors:
        raise typer.Exit(code=EXIT_USER_ERROR)


# -----------------------------------------------------------------------------
# Rules Command
# -----------------------------------------------------------------------------


@app.command()
def rules() -> None:
    """List the built-in rules."""
    table = Table(title="Rules")
    table.add_column("ID", no_wrap=True)
    table.add_column("Fixable", no_wrap=True)
    table.add_column("Description")

    for rule in create_default_registry():
        table.add_row(rule.id, "yes" if rule.fixable else "no", rule.description)

    console.print(table)


if __name__ == "__main__":
    app()
