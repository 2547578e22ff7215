"""Tests for host and path extraction."""

from __future__ import annotations

import pytest

from harscope.har.urls import extract_host, extract_path


class TestExtractHost:
    """Tests for extract_host."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://example.com/path", "example.com"),
            ("http://example.com", "example.com"),
            ("https://api.example.com:8443/v1?x=1", "api.example.com:8443"),
            ("https://user:pw@example.com/", "user:pw@example.com"),
        ],
    )
    def test_absolute_urls(self, url: str, expected: str) -> None:
        assert extract_host(url) == expected

    def test_no_normalization(self) -> None:
        """Authority is returned as captured: case and default port kept."""
        assert extract_host("https://Example.COM:443/") == "Example.COM:443"

    @pytest.mark.parametrize(
        "url",
        ["/relative/path", "", "ftp://example.com/file", "data:text/plain,hi", "https:///x"],
    )
    def test_non_matching_urls(self, url: str) -> None:
        """Relative, non-HTTP or malformed URLs yield an empty host."""
        assert extract_host(url) == ""


class TestExtractPath:
    """Tests for extract_path."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://example.com/a/b", "/a/b"),
            ("https://example.com/search?q=1", "/search"),
            ("https://example.com/page#section", "/page"),
            ("https://example.com/", "/"),
            ("https://example.com", "/"),
            ("https://example.com/a/b/?x=1#y", "/a/b/"),
        ],
    )
    def test_paths(self, url: str, expected: str) -> None:
        assert extract_path(url) == expected

    def test_relative_url_defaults_to_root(self) -> None:
        assert extract_path("/api/items") == "/"

    def test_query_without_path(self) -> None:
        """A query directly after the authority has no path segment."""
        assert extract_path("https://example.com?x=1") == "/"
