"""Tests for harscope.exceptions module."""

from __future__ import annotations

from pathlib import Path

import pytest

from harscope.exceptions import (
    DecodeError,
    FileAnalysisError,
    HarscopeError,
    ReadError,
    SaveError,
    ScanError,
    SetupError,
)


class TestHierarchy:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize("exc_type", [ScanError, SetupError, FileAnalysisError])
    def test_inherits_from_harscope_error(self, exc_type: type[Exception]) -> None:
        assert issubclass(exc_type, HarscopeError)

    @pytest.mark.parametrize("exc_type", [ReadError, DecodeError, SaveError])
    def test_per_file_errors(self, exc_type: type[Exception]) -> None:
        """Recoverable errors share FileAnalysisError."""
        assert issubclass(exc_type, FileAnalysisError)

    def test_fatal_errors_are_not_per_file(self) -> None:
        assert not issubclass(ScanError, FileAnalysisError)
        assert not issubclass(SetupError, FileAnalysisError)


class TestFileAnalysisError:
    """Tests for file-scoped error messages."""

    def test_message_includes_file_name(self) -> None:
        err = DecodeError("bad JSON", path=Path("/data/captures/x.har"))
        assert str(err) == "x.har: bad JSON"
        assert err.path == Path("/data/captures/x.har")

    def test_without_path(self) -> None:
        err = ReadError("boom")
        assert str(err) == "boom"
        assert err.path is None

    def test_string_path(self) -> None:
        assert SaveError("disk full", "y.har").path == Path("y.har")
