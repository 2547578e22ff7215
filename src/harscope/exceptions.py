"""Custom exceptions for harscope package."""

from __future__ import annotations

from pathlib import Path


class HarscopeError(Exception):
    """Base exception class for all harscope errors."""


class ScanError(HarscopeError):
    """Raised when the target directory cannot be walked for HAR files."""


class SetupError(HarscopeError):
    """Raised when the output directory cannot be created."""


class FileAnalysisError(HarscopeError):
    """Base class for errors tied to a single HAR file.

    These are recoverable: the driver reports them and moves on to the
    next file.

    Attributes:
        path: File the error relates to, when known.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{self.path.name}: {message}"
        super().__init__(message)


class ReadError(FileAnalysisError):
    """Raised when a HAR file cannot be read from disk."""


class DecodeError(FileAnalysisError):
    """Raised when HAR content is not valid JSON of the expected shape."""


class SaveError(FileAnalysisError):
    """Raised when analysis artifacts cannot be written."""
