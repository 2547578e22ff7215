"""Rendering of analysis results to JSON and Markdown documents.

Three documents are produced:
- the JSON analysis (full ``AnalysisResult``)
- a Markdown report per HAR file
- a Markdown summary listing every file of the run
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime

from harscope.har.analyzer import AnalysisResult

MAX_TABLE_ROWS = 20
NO_DATA = "_No data_"
DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Minimum-count filters (exclusive) for the frequency sections.
API_MIN_CALLS = 1
PARAMETER_MIN_COUNT = 1
HEADER_MIN_COUNT = 5


def render_analysis_json(result: AnalysisResult) -> str:
    """Serialize *result* to an indented JSON document."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False) + "\n"


def _cell(value: object) -> str:
    """Format a table cell, escaping characters that break Markdown tables."""
    return str(value).replace("|", "\\|").replace("\n", " ")


def _row(cells: Iterable[object]) -> str:
    return "| " + " | ".join(_cell(c) for c in cells) + " |"


def render_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[object]],
    max_rows: int = MAX_TABLE_ROWS,
) -> list[str]:
    """Render a Markdown table.

    Args:
        headers: Column titles.
        rows: Table rows, already sorted.
        max_rows: Maximum number of data rows. When there are more, an
            ellipsis row and a total row replace the remainder.

    Returns:
        Lines of the table, or a single no-data marker if *rows* is empty.
    """
    if not rows:
        return [NO_DATA]

    lines = [_row(headers), "|" + "|".join("------" for _ in headers) + "|"]
    lines.extend(_row(row) for row in rows[:max_rows])

    if len(rows) > max_rows:
        padding = [""] * (len(headers) - 1)
        lines.append(_row(["..."] * len(headers)))
        lines.append(_row([f"**Total**: {len(rows)} items", *padding]))
    return lines


def frequency_rows(counts: Mapping[str, int], min_count: int = 0) -> list[tuple[str, int]]:
    """Return ``(key, count)`` pairs with count above *min_count*, most frequent first.

    Ties keep the mapping's insertion order.
    """
    rows = [(key, count) for key, count in counts.items() if count > min_count]
    rows.sort(key=lambda row: row[1], reverse=True)
    return rows


def _section(lines: list[str], title: str, body: list[str]) -> None:
    lines.append(f"## {title}")
    lines.append("")
    lines.extend(body)
    lines.append("")


def _code_block(snippets: Sequence[str], language: str = "python") -> list[str]:
    if not snippets:
        return [NO_DATA, ""]
    return [f"```{language}", *snippets, "```", ""]


def render_markdown_report(result: AnalysisResult, max_rows: int = MAX_TABLE_ROWS) -> str:
    """Render the human-readable report for one HAR file.

    Args:
        result: Analysis result, with code templates already generated.
        max_rows: Row cap applied to every table.

    Returns:
        Markdown document.
    """
    meta = result.metadata
    extracted = result.extracted

    lines = [
        f"# HAR Analysis Report: {meta.file_name}",
        "",
        f"**Analysis time**: {meta.analysis_time.strftime(DISPLAY_TIME_FORMAT)}",
        "",
    ]

    _section(
        lines,
        "Basic Information",
        [
            f"- **Total requests**: {meta.total_requests}",
            f"- **Unique hosts**: {meta.unique_hosts}",
            f"- **Time span**: {meta.time_span}",
            f"- **Browser**: {meta.browser_info}",
            f"- **Creator**: {meta.creator_info}",
            f"- **HAR version**: {meta.har_version}",
        ],
    )

    host_rows = [(h.host, h.request_count, ", ".join(h.methods)) for h in result.hosts]
    _section(lines, "Hosts", render_table(("Host", "Requests", "Methods"), host_rows, max_rows))

    api_rows = [
        (api.method, api.path, api.host, api.call_count, api.response_type)
        for api in result.apis
        if api.call_count > API_MIN_CALLS
    ]
    _section(
        lines,
        f"Frequent APIs (calls > {API_MIN_CALLS})",
        render_table(("Method", "Path", "Host", "Calls", "Response Type"), api_rows, max_rows),
    )

    frequency_sections = (
        (
            f"Common Parameters (count > {PARAMETER_MIN_COUNT})",
            ("Parameter", "Count"),
            frequency_rows(extracted.parameters, PARAMETER_MIN_COUNT),
        ),
        (
            f"Common Request Headers (count > {HEADER_MIN_COUNT})",
            ("Header", "Count"),
            frequency_rows(extracted.headers, HEADER_MIN_COUNT),
        ),
        ("HTTP Methods", ("Method", "Count"), frequency_rows(extracted.methods)),
        ("Status Codes", ("Status Code", "Count"), frequency_rows(extracted.status_codes)),
        ("Response Types", ("Type", "Count"), frequency_rows(extracted.response_types)),
    )
    for title, headers, rows in frequency_sections:
        _section(lines, title, render_table(headers, rows, max_rows))

    templates = result.templates
    lines.extend(["## Code Templates", "", "### Data Classes", ""])
    for data_class in templates.data_classes:
        lines.extend(_code_block([data_class]))
    lines.extend(["### Common Request Headers", ""])
    lines.extend(_code_block(templates.headers))
    lines.extend(["### API Endpoints", ""])
    lines.extend(_code_block(templates.api_endpoints))

    return "\n".join(lines)


def render_summary_report(file_names: Sequence[str], generated_at: datetime) -> str:
    """Render the run summary listing every HAR file.

    No statistics are aggregated across files.

    Args:
        file_names: Base names of the HAR files, in processing order.
        generated_at: Time the summary is generated.

    Returns:
        Markdown document.
    """
    lines = [
        "# HAR Analysis Summary",
        "",
        f"**Generated**: {generated_at.strftime(DISPLAY_TIME_FORMAT)}",
        "",
        f"**Files analyzed**: {len(file_names)}",
        "",
        "## Analyzed Files",
        "",
    ]
    lines.extend(f"{index}. {name}" for index, name in enumerate(file_names, 1))
    lines.extend(
        [
            "",
            "## Usage",
            "",
            "1. Every HAR file has a matching JSON analysis and Markdown report",
            "2. The JSON files hold the complete structured data for further processing",
            "3. The Markdown reports present the same analysis in readable form",
            "4. The code templates can be copied as a starting point for an API client",
            "",
            "## Generated Files",
            "",
            "- `*_analysis_*.json`: structured analysis data",
            "- `*_report_*.md`: readable analysis report",
            "- `summary_report.md`: this summary",
            "",
        ]
    )
    return "\n".join(lines)
