"""Shared fixtures for unit tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

EntryFactory = Callable[..., dict[str, Any]]


@pytest.fixture
def sample_har_path() -> Path:
    """Path to sample HAR fixture."""
    return Path(__file__).parent.parent / "fixtures" / "sample.har"


@pytest.fixture
def make_entry() -> EntryFactory:
    """Factory for raw HAR entry dicts with sensible defaults."""

    def _make_entry(
        url: str = "https://example.com/",
        method: str = "GET",
        status: int = 200,
        mime_type: str = "application/json",
        started: str = "2024-01-15T10:00:00.000Z",
        headers: list[tuple[str, str]] | None = None,
        query: list[tuple[str, str]] | None = None,
        body: str | None = None,
    ) -> dict[str, Any]:
        request: dict[str, Any] = {
            "method": method,
            "url": url,
            "headers": [{"name": n, "value": v} for n, v in headers or []],
            "queryString": [{"name": n, "value": v} for n, v in query or []],
        }
        if body is not None:
            request["postData"] = {"mimeType": "", "text": body}
        return {
            "startedDateTime": started,
            "time": 10.0,
            "request": request,
            "response": {
                "status": status,
                "statusText": "",
                "headers": [],
                "content": {"size": 0, "mimeType": mime_type},
            },
        }

    return _make_entry


@pytest.fixture
def make_har() -> Callable[..., str]:
    """Factory serializing entry dicts into HAR JSON text."""

    def _make_har(entries: list[dict[str, Any]], **log: Any) -> str:
        return json.dumps({"log": {"version": "1.2", **log, "entries": entries}})

    return _make_har
