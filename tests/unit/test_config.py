"""Tests for configuration management."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from harscope.config import HarscopeSettings, get_settings, reset_settings


class TestHarscopeSettings:
    """Tests for HarscopeSettings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("HARSCOPE_OUTPUT_DIR")
        settings = HarscopeSettings(_env_file=None)
        assert settings.output_dir == Path("universal_har_analysis")
        assert settings.max_table_rows == 20
        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HARSCOPE_OUTPUT_DIR", "/tmp/reports")
        monkeypatch.setenv("HARSCOPE_MAX_TABLE_ROWS", "5")
        monkeypatch.setenv("HARSCOPE_LOG_FORMAT", "json")
        settings = HarscopeSettings()
        assert settings.output_dir == Path("/tmp/reports")
        assert settings.max_table_rows == 5
        assert settings.log_format == "json"

    def test_row_limit_must_be_positive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HARSCOPE_MAX_TABLE_ROWS", "0")
        with pytest.raises(ValidationError):
            HarscopeSettings()

    def test_no_directory_side_effects(self, tmp_path: Path, isolated_settings: Path) -> None:
        """Loading settings never creates the output directory."""
        HarscopeSettings()
        assert not isolated_settings.exists()


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_reset(self) -> None:
        first = get_settings()
        reset_settings()
        assert get_settings() is not first
