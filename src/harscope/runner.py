"""Batch driver: discover HAR files, analyze each one, write the summary.

Files are processed one at a time in discovery order. A failure on one file
(read, decode or save) is reported and the run moves on; only scanning the
root directory and creating the output directory are fatal.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from rich.console import Console

from harscope import console as hs_console
from harscope.exceptions import FileAnalysisError, SaveError, ScanError
from harscope.har.analyzer import AnalysisResult, analyze_document
from harscope.har.generator import generate_code_templates
from harscope.har.parser import parse_har_file
from harscope.logging import get_logger
from harscope.report import render_summary_report
from harscope.storage import HAR_SUFFIX, ReportStore

LOG = get_logger(__name__)

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Return the current local time as an aware datetime."""
    return datetime.now().astimezone()


@dataclass
class RunSummary:
    """Outcome of a batch run.

    Attributes:
        files: Every HAR file discovered, in processing order.
        results: Successful analyses, including those whose save failed.
        failures: Recoverable per-file errors, in the order they occurred.
        summary_path: Location of ``summary_report.md``, or None if it was
            not written.
    """

    files: list[Path] = field(default_factory=list)
    results: list[AnalysisResult] = field(default_factory=list)
    failures: list[FileAnalysisError] = field(default_factory=list)
    summary_path: Path | None = None


def _raise_scan_error(exc: OSError) -> None:
    raise ScanError(f"Failed to scan {exc.filename}: {exc.strerror or exc}") from exc


def scan_har_files(root: Path | str) -> list[Path]:
    """Recursively find ``*.har`` files (case-insensitive) under *root*.

    Directories and files are visited in lexical order.

    Raises:
        ScanError: If *root* or any directory below it cannot be listed.
    """
    root = Path(root)
    if not root.is_dir():
        raise ScanError(f"Failed to scan {root}: not a directory")

    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_scan_error):
        dirnames.sort()
        for name in sorted(filenames):
            if name.lower().endswith(HAR_SUFFIX):
                found.append(Path(dirpath) / name)

    LOG.info("har_scan_complete", root=str(root), files=len(found))
    return found


def analyze_har_file(path: Path | str, now: datetime | None = None) -> AnalysisResult:
    """Parse, aggregate and generate code templates for one HAR file.

    Args:
        path: HAR file to analyze.
        now: Analysis timestamp recorded in the metadata.

    Returns:
        Complete AnalysisResult.

    Raises:
        ReadError: If the file cannot be read.
        DecodeError: If the file is not a valid HAR document.
    """
    path = Path(path)
    document = parse_har_file(path)
    result = analyze_document(document, path.name, now=now)
    result.templates = generate_code_templates(result)
    LOG.info(
        "har_file_analyzed",
        file_name=path.name,
        requests=result.metadata.total_requests,
        hosts=result.metadata.unique_hosts,
        apis=len(result.apis),
    )
    return result


def analyze_all(
    root: Path | str,
    store: ReportStore,
    clock: Clock = local_now,
    console: Console | None = None,
) -> RunSummary:
    """Analyze every HAR file under *root* and write artifacts via *store*.

    Args:
        root: Directory scanned recursively for HAR files.
        store: Destination for the per-file artifacts and the summary.
        clock: Source of the analysis time and the file name timestamps.
        console: Console for progress messages. Defaults to stdout.

    Returns:
        RunSummary describing what was processed.

    Raises:
        SetupError: If the output directory cannot be created.
        ScanError: If *root* cannot be scanned.
    """
    out = console or hs_console.out_console
    store.prepare()
    files = scan_har_files(root)
    summary = RunSummary(files=files)

    if not files:
        hs_console.warn("No HAR files found", console=out)
        return summary

    hs_console.info(f"Found {len(files)} HAR file(s)", console=out)

    for index, path in enumerate(files, 1):
        hs_console.step(index, len(files), path.name, console=out)
        now = clock()

        try:
            result = analyze_har_file(path, now=now)
        except FileAnalysisError as exc:
            LOG.warning("har_file_failed", path=str(path), error=str(exc))
            hs_console.error(f"Analysis failed: {exc}", console=out)
            summary.failures.append(exc)
            continue

        summary.results.append(result)

        try:
            store.save_analysis(result, int(now.timestamp()))
        except SaveError as exc:
            hs_console.warn(f"Failed to save results: {exc}", console=out)
            summary.failures.append(exc)
            continue

        hs_console.success(
            f"Analyzed {result.metadata.total_requests} requests, "
            f"{result.metadata.unique_hosts} hosts, {len(result.apis)} APIs",
            console=out,
        )

    try:
        summary.summary_path = store.save_summary(
            render_summary_report([p.name for p in files], clock())
        )
    except SaveError as exc:
        hs_console.warn(f"Failed to write summary report: {exc}", console=out)
        summary.failures.append(exc)

    LOG.info(
        "har_run_complete",
        files=len(files),
        analyzed=len(summary.results),
        failures=len(summary.failures),
    )
    return summary
