"""Tests for code template generation."""

from __future__ import annotations

from datetime import UTC, datetime

from harscope.har.analyzer import AnalysisMetadata, AnalysisResult, ApiInfo, ExtractedData
from harscope.har.generator import (
    API_RESPONSE_TEMPLATE,
    PAGED_RESPONSE_TEMPLATE,
    generate_code_templates,
)


def _result(
    apis: list[ApiInfo] | None = None,
    headers: dict[str, int] | None = None,
) -> AnalysisResult:
    return AnalysisResult(
        metadata=AnalysisMetadata(file_name="t.har", analysis_time=datetime.now(UTC)),
        apis=apis or [],
        extracted=ExtractedData(headers=headers or {}),
    )


def _api(method: str, path: str, calls: int) -> ApiInfo:
    return ApiInfo(method=method, url=f"https://a.com{path}", host="a.com", path=path, call_count=calls)


class TestDataClasses:
    """Tests for the static response shapes."""

    def test_static_shapes(self) -> None:
        templates = generate_code_templates(_result())
        assert templates.data_classes == [API_RESPONSE_TEMPLATE, PAGED_RESPONSE_TEMPLATE]

    def test_shapes_are_valid_python(self) -> None:
        """Templates compile as Python source."""
        for template in generate_code_templates(_result()).data_classes:
            compile(template, "<template>", "exec")

    def test_shapes_independent_of_data(self) -> None:
        busy = _result([_api("GET", "/x", 9)], {"Cookie": 9})
        assert generate_code_templates(busy).data_classes == generate_code_templates(
            _result()
        ).data_classes


class TestApiEndpoints:
    """Tests for the endpoint comment list."""

    def test_only_repeated_calls(self) -> None:
        result = _result([_api("GET", "/items", 3), _api("POST", "/items", 2), _api("GET", "/once", 1)])
        assert generate_code_templates(result).api_endpoints == [
            "# GET /items (called 3 times)",
            "# POST /items (called 2 times)",
        ]

    def test_no_repeated_calls(self) -> None:
        assert generate_code_templates(_result([_api("GET", "/once", 1)])).api_endpoints == []


class TestHeaders:
    """Tests for session header snippets."""

    def test_important_recurring_headers_sorted(self) -> None:
        result = _result(
            headers={
                "Accept": 3,
                "Cookie": 10,
                "X-Trace-Id": 50,
                "Authorization": 1,
                "X-CSRF-Token": 3,
            }
        )
        assert generate_code_templates(result).headers == [
            'session.headers["Cookie"] = "your_value_here"  # seen 10 times',
            'session.headers["Accept"] = "your_value_here"  # seen 3 times',
            'session.headers["X-CSRF-Token"] = "your_value_here"  # seen 3 times',
        ]

    def test_input_not_modified(self) -> None:
        result = _result([_api("GET", "/x", 2)], {"Cookie": 2})
        generate_code_templates(result)
        assert result.templates.headers == []
        assert result.extracted.headers == {"Cookie": 2}
