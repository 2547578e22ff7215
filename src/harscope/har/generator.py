"""Code template generation from HAR analysis.

Produces copy-paste starting points for a client of the captured API:
response dataclasses, a commented endpoint list and header assignments
for a ``requests.Session``.
"""

from __future__ import annotations

from textwrap import dedent

from harscope.har.analyzer import AnalysisResult, CodeTemplates, is_important_header
from harscope.logging import get_logger

LOG = get_logger(__name__)

API_RESPONSE_TEMPLATE = dedent('''
    @dataclass
    class APIResponse:
        """Generic wrapped API response."""

        code: int
        message: str
        data: Any
''').strip()

PAGED_RESPONSE_TEMPLATE = dedent('''
    @dataclass
    class PagedResponse:
        """Paginated list response."""

        content: list[Any]
        total_elements: int
        total_pages: int
        size: int
        number: int
''').strip()

HEADER_PLACEHOLDER = "your_value_here"


def _generate_data_classes() -> list[str]:
    """Return the static response shapes."""
    return [API_RESPONSE_TEMPLATE, PAGED_RESPONSE_TEMPLATE]


def _generate_api_endpoints(result: AnalysisResult) -> list[str]:
    """List every API called more than once, as comment lines.

    Args:
        result: Analysis result with APIs already sorted by call count.

    Returns:
        Lines like ``# GET /api/items (called 3 times)``.
    """
    return [
        f"# {api.method} {api.path} (called {api.call_count} times)"
        for api in result.apis
        if api.call_count > 1
    ]


def _generate_header_lines(result: AnalysisResult) -> list[str]:
    """Emit session header assignments for recurring important headers.

    Only headers seen more than once are included, most frequent first.
    """
    recurring = [
        (name, count)
        for name, count in result.extracted.headers.items()
        if count > 1 and is_important_header(name)
    ]
    recurring.sort(key=lambda item: item[1], reverse=True)

    return [
        f'session.headers["{name}"] = "{HEADER_PLACEHOLDER}"  # seen {count} times'
        for name, count in recurring
    ]


def generate_code_templates(result: AnalysisResult) -> CodeTemplates:
    """Derive code templates from an analysis result.

    Pure function of *result*; it is not modified.

    Args:
        result: Aggregated analysis of one HAR file.

    Returns:
        CodeTemplates with data classes, endpoint lines and header lines.
    """
    templates = CodeTemplates(
        data_classes=_generate_data_classes(),
        api_endpoints=_generate_api_endpoints(result),
        headers=_generate_header_lines(result),
    )
    LOG.debug(
        "code_templates_generated",
        file_name=result.metadata.file_name,
        endpoints=len(templates.api_endpoints),
        headers=len(templates.headers),
    )
    return templates
