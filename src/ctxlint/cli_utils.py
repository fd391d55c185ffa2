"""CLI utility functions for ctxlint.

Provides helper functions for:
- Config wiring: Extracting Typer CLI options and passing to load_config
- Path resolution: Turning CLI path arguments into absolute paths
- Error formatting: Consistent user-friendly error messages with exit codes
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, NoReturn

import typer

from ctxlint.config import CtxlintConfig, load_config

# Exit code conventions
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Lint errors, bad input, missing file
EXIT_SYSTEM_ERROR = 2  # Permissions, I/O while writing fixes


# -----------------------------------------------------------------------------
# Error Formatting Helpers
# -----------------------------------------------------------------------------


def error(msg: str, *, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Print an error message and exit with the given exit code.

    Raises:
        typer.Exit: Always raises to exit the program.
    """
    styled_prefix = typer.style("Error:", fg=typer.colors.RED, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)
    raise typer.Exit(code=exit_code)


def warning(msg: str) -> None:
    """Print a warning message to stderr."""
    styled_prefix = typer.style("Warning:", fg=typer.colors.YELLOW, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)


def success(msg: str) -> None:
    """Print a success message to stdout."""
    styled_prefix = typer.style("Success:", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"{styled_prefix} {msg}")


# -----------------------------------------------------------------------------
# Path Resolution Helper
# -----------------------------------------------------------------------------


def resolve_path(path: str | Path, base_path: Path | None = None) -> Path:
    """Resolve a path relative to a base path (default: cwd)."""
    p = Path(path)
    base = base_path or Path.cwd()
    return p.resolve() if p.is_absolute() else (base / p).resolve()


# -----------------------------------------------------------------------------
# Config Wiring Helper
# -----------------------------------------------------------------------------


def wire_config(
    max_size: int | None = None,
    max_import_depth: int | None = None,
    start_dir: Path | None = None,
) -> CtxlintConfig:
    """Wire CLI options to load_config with appropriate overrides.

    Args:
        max_size: Override for the file-size budget.
        max_import_depth: Override for the import chain limit.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved CtxlintConfig instance.

    Raises:
        typer.Exit: If configuration is invalid.
    """
    cli_overrides: dict[str, Any] = {}

    if max_size is not None:
        cli_overrides["max_size"] = max_size
    if max_import_depth is not None:
        cli_overrides["max_import_depth"] = max_import_depth

    try:
        return load_config(cli_overrides=cli_overrides, start_dir=start_dir)
    except ValueError as e:
        error(f"Invalid configuration: {e}", exit_code=EXIT_USER_ERROR)


# -----------------------------------------------------------------------------
# Typer Option Factory Functions
# -----------------------------------------------------------------------------
# Typer consumes Option objects when decorating commands, so each command
# needs a fresh instance.


def max_size_option() -> Any:
    """Create a Typer Option for --max-size."""
    return typer.Option(
        None,
        "--max-size",
        help="Maximum file size in characters (default: 10000).",
    )


def max_depth_option() -> Any:
    """Create a Typer Option for --max-depth."""
    return typer.Option(
        None,
        "--max-depth",
        help="Maximum import chain depth (default: 5).",
    )
