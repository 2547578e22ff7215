"""File-based storage for analysis artifacts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from harscope.exceptions import SaveError, SetupError
from harscope.har.analyzer import AnalysisResult
from harscope.logging import get_logger
from harscope.report import (
    MAX_TABLE_ROWS,
    render_analysis_json,
    render_markdown_report,
)

LOG = get_logger(__name__)

SUMMARY_FILE_NAME = "summary_report.md"
HAR_SUFFIX = ".har"


def artifact_stem(file_name: str) -> str:
    """Strip a trailing ``.har`` (any case) from a HAR file name."""
    if file_name.lower().endswith(HAR_SUFFIX):
        return file_name[: -len(HAR_SUFFIX)]
    return file_name


@dataclass(frozen=True)
class SavedArtifacts:
    """Paths written for one analyzed file."""

    json_path: Path
    report_path: Path


class ReportStore:
    """Writes analysis artifacts into a single output directory.

    Layout:
        output_dir/
            <name>_analysis_<unix>.json
            <name>_report_<unix>.md
            summary_report.md
    """

    def __init__(self, output_dir: Path, max_table_rows: int = MAX_TABLE_ROWS) -> None:
        self._output_dir = Path(output_dir)
        self._max_table_rows = max_table_rows

    @property
    def output_dir(self) -> Path:
        """Return the directory artifacts are written to."""
        return self._output_dir

    def prepare(self) -> None:
        """Create the output directory if it does not exist.

        Raises:
            SetupError: If the directory cannot be created.
        """
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SetupError(
                f"Failed to create output directory {self._output_dir}: {exc}"
            ) from exc
        LOG.debug("output_dir_ready", output_dir=str(self._output_dir))

    def _write(self, path: Path, content: str, file_name: str | None = None) -> None:
        # Lone surrogates (from JSON escapes) have no UTF-8 form and are
        # written as \uXXXX escapes.
        data = content.encode("utf-8", errors="backslashreplace")
        try:
            path.write_bytes(data)
        except OSError as exc:
            LOG.warning("artifact_save_failed", path=str(path), error=str(exc))
            raise SaveError(f"Failed to write {path.name}: {exc}", path=file_name) from exc

    def save_analysis(self, result: AnalysisResult, timestamp: int) -> SavedArtifacts:
        """Write the JSON analysis and the Markdown report for *result*.

        Args:
            result: Analysis result with generated code templates.
            timestamp: Unix timestamp embedded in both file names.

        Returns:
            Paths of the two written files.

        Raises:
            SaveError: If either file cannot be written.
        """
        file_name = result.metadata.file_name
        stem = artifact_stem(file_name)
        json_path = self._output_dir / f"{stem}_analysis_{timestamp}.json"
        report_path = self._output_dir / f"{stem}_report_{timestamp}.md"
        if json_path.exists():
            LOG.warning("analysis_overwritten", file_name=file_name, path=str(json_path))

        self._write(json_path, render_analysis_json(result), file_name)
        self._write(
            report_path,
            render_markdown_report(result, max_rows=self._max_table_rows),
            file_name,
        )

        LOG.info(
            "analysis_saved",
            file_name=file_name,
            json_path=str(json_path),
            report_path=str(report_path),
        )
        return SavedArtifacts(json_path=json_path, report_path=report_path)

    def save_summary(self, content: str) -> Path:
        """Write the run summary document.

        Raises:
            SaveError: If the file cannot be written.
        """
        path = self._output_dir / SUMMARY_FILE_NAME
        self._write(path, content)
        LOG.info("summary_saved", path=str(path))
        return path
