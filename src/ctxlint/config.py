"""Configuration management for the ctxlint CLI tool.

Handles configuration loading from multiple sources with precedence:
CLI args > environment variables > .ctxlintrc > pyproject.toml > defaults
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

logger = logging.getLogger(__name__)

RC_FILENAME = ".ctxlintrc"


@dataclass
class CtxlintConfig:
    """Configuration for the ctxlint CLI tool.

    Attributes:
        max_size: Character budget for the file-size rule (default: 10000)
        max_import_depth: Maximum import chain length (default: 5)
        context_lines: Context lines shown in interactive previews (default: 3)
        disabled_rules: Rule ids that should not run (default: none)
    """

    max_size: int = 10000
    max_import_depth: int = 5
    context_lines: int = 3
    disabled_rules: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid.
        """
        for name in ("max_size", "max_import_depth"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer")

        if (
            isinstance(self.context_lines, bool)
            or not isinstance(self.context_lines, int)
            or self.context_lines < 0
        ):
            raise ValueError("context_lines must be a non-negative integer")

        if not isinstance(self.disabled_rules, list) or not all(
            isinstance(rule_id, str) and rule_id for rule_id in self.disabled_rules
        ):
            raise ValueError("disabled_rules must be a list of rule ids")


def _get_config_field_names() -> set[str]:
    """Get the set of valid configuration field names."""
    return {f.name for f in fields(CtxlintConfig)}


def _search_dirs(start_dir: Path | None) -> Iterator[Path]:
    """Yield the start directory and its ancestors.

    The walk ends at the repository root, the first directory holding a
    `.git` entry.
    """
    current = (start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        yield directory
        if (directory / ".git").exists():
            return


def find_config_file(filename: str = RC_FILENAME, start_dir: Path | None = None) -> Path | None:
    """Find the nearest config file above `start_dir`.

    Args:
        filename: Name of the config file to find.
        start_dir: Directory to start searching from. Defaults to current directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    for directory in _search_dirs(start_dir):
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def _read_table(filename: str, start_dir: Path | None, *section: str) -> dict[str, Any]:
    """Read the nearest `filename` and return the table at `section`.

    An unreadable or malformed file is logged and contributes nothing.
    """
    path = find_config_file(filename, start_dir)
    if path is None:
        return {}

    try:
        with open(path, "rb") as f:
            table: Any = tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return {}

    for key in section:
        table = table.get(key, {}) if isinstance(table, dict) else {}
    return _filter_fields(table) if isinstance(table, dict) else {}


def _filter_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Translate dashed keys and drop anything that is not a config field."""
    valid_fields = _get_config_field_names()
    normalized = {key.replace("-", "_"): value for key, value in data.items()}
    return {k: v for k, v in normalized.items() if k in valid_fields}


def _parse_int(env_var: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{env_var} must be an integer, got {value!r}") from None


def _load_from_env() -> dict[str, Any]:
    """Load configuration from environment variables.

    Environment variables are prefixed with CTXLINT_ and use uppercase names.
    For example: CTXLINT_MAX_SIZE, CTXLINT_MAX_IMPORT_DEPTH,
    CTXLINT_CONTEXT_LINES, CTXLINT_DISABLED_RULES (comma separated).

    Raises:
        ValueError: If an integer setting does not parse.
    """
    int_mapping = {
        "CTXLINT_MAX_SIZE": "max_size",
        "CTXLINT_MAX_IMPORT_DEPTH": "max_import_depth",
        "CTXLINT_CONTEXT_LINES": "context_lines",
    }

    result: dict[str, Any] = {}
    for env_var, config_key in int_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            result[config_key] = _parse_int(env_var, value)

    disabled = os.environ.get("CTXLINT_DISABLED_RULES")
    if disabled is not None:
        result["disabled_rules"] = [r.strip() for r in disabled.split(",") if r.strip()]

    return result


def load_config(
    cli_overrides: dict[str, Any] | None = None,
    start_dir: Path | None = None,
) -> CtxlintConfig:
    """Load configuration with full precedence chain.

    Precedence (highest to lowest):
    1. CLI arguments (cli_overrides)
    2. Environment variables (CTXLINT_*)
    3. .ctxlintrc file
    4. pyproject.toml [tool.ctxlint] section
    5. Default values

    Args:
        cli_overrides: Configuration overrides from CLI arguments.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved CtxlintConfig instance.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    layers = (
        _read_table("pyproject.toml", start_dir, "tool", "ctxlint"),
        _read_table(RC_FILENAME, start_dir),
        _load_from_env(),
        _filter_fields(cli_overrides or {}),
    )
    # Later layers win; None means "not set".
    merged = {key: value for layer in layers for key, value in layer.items() if value is not None}

    return CtxlintConfig(**merged)
