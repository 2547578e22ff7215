"""harscope - batch analysis of HTTP Archive (HAR) captures.

Turns browser network captures into host, endpoint, parameter and header
statistics, with a JSON analysis and a Markdown report per file.

This package provides:
- A tolerant HAR decoder
- Single-pass aggregation into per-host and per-API records
- Code template generation for API clients
- JSON and Markdown rendering

Example:
    >>> from harscope import analyze_har_file, render_markdown_report
    >>> result = analyze_har_file("capture.har")
    >>> print(render_markdown_report(result))
"""

from harscope.config import HarscopeSettings, get_settings
from harscope.exceptions import (
    DecodeError,
    FileAnalysisError,
    HarscopeError,
    ReadError,
    SaveError,
    ScanError,
    SetupError,
)
from harscope.har import AnalysisResult, analyze_document, generate_code_templates, parse_har_file
from harscope.report import render_analysis_json, render_markdown_report, render_summary_report
from harscope.runner import RunSummary, analyze_all, analyze_har_file, scan_har_files
from harscope.storage import ReportStore

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Pipeline
    "parse_har_file",
    "analyze_document",
    "generate_code_templates",
    "analyze_har_file",
    "analyze_all",
    "scan_har_files",
    "AnalysisResult",
    "RunSummary",
    # Rendering and storage
    "render_analysis_json",
    "render_markdown_report",
    "render_summary_report",
    "ReportStore",
    # Configuration
    "HarscopeSettings",
    "get_settings",
    # Exceptions
    "HarscopeError",
    "FileAnalysisError",
    "ScanError",
    "SetupError",
    "ReadError",
    "DecodeError",
    "SaveError",
]
