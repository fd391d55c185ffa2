"""Pytest configuration and fixtures for ctxlint tests."""

import os

import pytest

# Set a fixed terminal width to prevent line wrapping issues in CI
# This must be set before any Rich imports
os.environ.setdefault("COLUMNS", "200")
os.environ.setdefault("LINES", "50")
# Disable Rich's terminal detection to ensure consistent output
os.environ.setdefault("TERM", "dumb")

CONFIG_ENV_VARS = (
    "CTXLINT_MAX_SIZE",
    "CTXLINT_MAX_IMPORT_DEPTH",
    "CTXLINT_CONTEXT_LINES",
    "CTXLINT_DISABLED_RULES",
)


@pytest.fixture(autouse=True)
def _clean_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CTXLINT_* variables from the outer environment out of tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
