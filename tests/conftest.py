"""Pytest configuration for harscope tests."""

import sys
from pathlib import Path

import pytest
import structlog
from structlog._config import BoundLoggerLazyProxy

# Add src directory to sys.path for test imports
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate each test with its own output directory.

    This fixture:
    - Points HARSCOPE_OUTPUT_DIR at a temporary directory
    - Clears other HARSCOPE_ variables inherited from the environment
    - Resets the global settings instance before each test
    """
    for name in ("HARSCOPE_LOG_LEVEL", "HARSCOPE_LOG_FORMAT", "HARSCOPE_MAX_TABLE_ROWS"):
        monkeypatch.delenv(name, raising=False)

    output_dir = tmp_path / "harscope-output"
    monkeypatch.setenv("HARSCOPE_OUTPUT_DIR", str(output_dir))

    from harscope.config import reset_settings

    reset_settings()

    return output_dir


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Reset structlog after each test to prevent closed file handle errors.

    CliRunner captures stderr with a temporary file. When configure_logging()
    runs inside CliRunner, structlog binds loggers to that temp file. After
    the test, CliRunner closes the file.
    """
    yield
    structlog.reset_defaults()
    for module in list(sys.modules.values()):
        for attr in getattr(module, "__dict__", {}).values():
            if isinstance(attr, BoundLoggerLazyProxy):
                attr.__dict__.pop("bind", None)
