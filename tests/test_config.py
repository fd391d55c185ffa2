"""Tests for ctxlint configuration management."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from ctxlint.config import CtxlintConfig, find_config_file, load_config


class TestCtxlintConfig:
    """Tests for the CtxlintConfig dataclass."""

    def test_default_values(self) -> None:
        """Test that default values are set correctly."""
        config = CtxlintConfig()
        assert config.max_size == 10000
        assert config.max_import_depth == 5
        assert config.context_lines == 3
        assert config.disabled_rules == []

    def test_custom_values(self) -> None:
        """Test that custom values can be set."""
        config = CtxlintConfig(
            max_size=500,
            max_import_depth=2,
            context_lines=0,
            disabled_rules=["format"],
        )
        assert config.max_size == 500
        assert config.max_import_depth == 2
        assert config.context_lines == 0
        assert config.disabled_rules == ["format"]

    @pytest.mark.parametrize("value", [0, -5, "10", True])
    def test_validation_max_size(self, value: object) -> None:
        """Test that max_size must be a positive integer."""
        with pytest.raises(ValueError, match="max_size must be a positive integer"):
            CtxlintConfig(max_size=value)  # type: ignore[arg-type]

    def test_validation_max_import_depth(self) -> None:
        """Test that max_import_depth must be a positive integer."""
        with pytest.raises(ValueError, match="max_import_depth must be a positive integer"):
            CtxlintConfig(max_import_depth=0)

    def test_validation_context_lines(self) -> None:
        """Test that context_lines cannot be negative."""
        with pytest.raises(ValueError, match="context_lines must be a non-negative integer"):
            CtxlintConfig(context_lines=-1)

    def test_validation_disabled_rules(self) -> None:
        """Test that disabled_rules must hold non-empty strings."""
        with pytest.raises(ValueError, match="disabled_rules"):
            CtxlintConfig(disabled_rules=["format", ""])


class TestFindConfigFile:
    """Tests for find_config_file."""

    def test_finds_in_start_dir(self, tmp_path: Path) -> None:
        """Test that the rc file is found in the start directory."""
        rc = tmp_path / ".ctxlintrc"
        rc.write_text("max_size = 5\n")
        assert find_config_file(start_dir=tmp_path) == rc.resolve()

    def test_finds_in_parent(self, tmp_path: Path) -> None:
        """Test that the search walks up to parent directories."""
        rc = tmp_path / ".ctxlintrc"
        rc.write_text("max_size = 5\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(start_dir=nested) == rc.resolve()

    def test_missing(self, tmp_path: Path) -> None:
        """Test that None is returned when no rc file exists."""
        assert find_config_file("no-such-config-file.toml", start_dir=tmp_path) is None

    def test_search_stops_at_repository_root(self, tmp_path: Path) -> None:
        """Test that files above the directory holding .git are not used."""
        (tmp_path / ".ctxlintrc").write_text("max_size = 5\n")
        repo = tmp_path / "repo"
        (repo / ".git").mkdir(parents=True)
        nested = repo / "docs"
        nested.mkdir()
        assert find_config_file(start_dir=nested) is None

    def test_repository_root_itself_searched(self, tmp_path: Path) -> None:
        """Test that the repository root directory is still searched."""
        repo = tmp_path / "repo"
        (repo / ".git").mkdir(parents=True)
        rc = repo / ".ctxlintrc"
        rc.write_text("max_size = 5\n")
        nested = repo / "docs"
        nested.mkdir()
        assert find_config_file(start_dir=nested) == rc.resolve()


class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_defaults(self, tmp_path: Path) -> None:
        """Test that defaults apply when no source sets a value."""
        assert load_config(start_dir=tmp_path) == CtxlintConfig()

    def test_from_rc(self, tmp_path: Path) -> None:
        """Test loading values from .ctxlintrc."""
        (tmp_path / ".ctxlintrc").write_text(
            'max_size = 2000\ndisabled-rules = ["file-size"]\nunknown = 1\n'
        )
        config = load_config(start_dir=tmp_path)
        assert config.max_size == 2000
        assert config.disabled_rules == ["file-size"]

    def test_from_pyproject(self, tmp_path: Path) -> None:
        """Test loading values from [tool.ctxlint] in pyproject.toml."""
        (tmp_path / "pyproject.toml").write_text(
            "[tool.ctxlint]\nmax_import_depth = 3\ncontext_lines = 1\n"
        )
        config = load_config(start_dir=tmp_path)
        assert config.max_import_depth == 3
        assert config.context_lines == 1

    def test_rc_overrides_pyproject(self, tmp_path: Path) -> None:
        """Test that .ctxlintrc takes precedence over pyproject.toml."""
        (tmp_path / "pyproject.toml").write_text("[tool.ctxlint]\nmax_size = 100\n")
        (tmp_path / ".ctxlintrc").write_text("max_size = 200\n")
        assert load_config(start_dir=tmp_path).max_size == 200

    def test_env_overrides_rc(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that environment variables take precedence over .ctxlintrc."""
        (tmp_path / ".ctxlintrc").write_text("max_size = 200\n")
        monkeypatch.setenv("CTXLINT_MAX_SIZE", "300")
        monkeypatch.setenv("CTXLINT_DISABLED_RULES", "format, file-size")
        config = load_config(start_dir=tmp_path)
        assert config.max_size == 300
        assert config.disabled_rules == ["format", "file-size"]

    def test_cli_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that CLI overrides take precedence over everything."""
        monkeypatch.setenv("CTXLINT_MAX_IMPORT_DEPTH", "4")
        config = load_config(
            cli_overrides={"max_import_depth": 7, "max_size": None, "bogus": 1},
            start_dir=tmp_path,
        )
        assert config.max_import_depth == 7
        assert config.max_size == 10000

    def test_invalid_env_value(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a non-integer environment value raises ValueError."""
        monkeypatch.setenv("CTXLINT_MAX_SIZE", "big")
        with pytest.raises(ValueError, match="CTXLINT_MAX_SIZE must be an integer"):
            load_config(start_dir=tmp_path)

    def test_invalid_toml_ignored(self, tmp_path: Path) -> None:
        """Test that a malformed TOML file is ignored."""
        (tmp_path / ".ctxlintrc").write_text("max_size = = 1\n")
        assert load_config(start_dir=tmp_path).max_size == 10000

    def test_invalid_toml_logged(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a malformed TOML file is reported in the log."""
        (tmp_path / ".ctxlintrc").write_text("max_size = = 1\n")
        with caplog.at_level(logging.WARNING, logger="ctxlint.config"):
            load_config(start_dir=tmp_path)
        assert "Ignoring config file" in caplog.text

    def test_pyproject_without_section(self, tmp_path: Path) -> None:
        """Test that a pyproject.toml without [tool.ctxlint] gives defaults."""
        (tmp_path / "pyproject.toml").write_text("[tool.other]\nmax_size = 5\n")
        assert load_config(start_dir=tmp_path).max_size == 10000

    def test_invalid_value_in_file_rejected(self, tmp_path: Path) -> None:
        """Test that an invalid value in a config file raises ValueError."""
        (tmp_path / ".ctxlintrc").write_text("max_size = -1\n")
        with pytest.raises(ValueError, match="max_size"):
            load_config(start_dir=tmp_path)
