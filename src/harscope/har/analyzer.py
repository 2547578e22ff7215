"""HAR aggregation into per-host, per-API and per-category statistics.

A single pass over the entries of a decoded HAR document produces:
- host records (request count, methods and paths seen)
- API records keyed by ``(method, path)``
- frequency maps for parameters, headers, methods, status codes,
  content types and simplified response types
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from harscope.har.params import extract_body_parameters
from harscope.har.parser import HARDocument, HAREntry
from harscope.har.urls import extract_host, extract_path
from harscope.logging import get_logger

LOG = get_logger(__name__)

RFC3339_REGEX = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:[Zz]|([+-])(\d{2}):(\d{2}))",
    re.ASCII,
)

# Substrings marking a request header as security/identity relevant.
# Plain substring test, so "token" also hits "x-token-refresh".
IMPORTANT_HEADER_KEYWORDS = (
    "authorization",
    "cookie",
    "content-type",
    "accept",
    "user-agent",
    "referer",
    "origin",
    "x-requested-with",
    "x-csrf-token",
    "x-api-key",
    "bearer",
    "token",
)

# Checked in order, first match wins.
RESPONSE_TYPE_RULES = (
    ("json", "JSON"),
    ("html", "HTML"),
    ("xml", "XML"),
    ("javascript", "JavaScript"),
    ("css", "CSS"),
    ("image", "Image"),
    ("text", "Text"),
)
OTHER_RESPONSE_TYPE = "Other"

TIME_FORMAT = "%H:%M:%S"


@dataclass
class HostInfo:
    """Traffic seen for one host."""

    host: str
    request_count: int = 0
    methods: list[str] = field(default_factory=list)
    paths: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "host": self.host,
            "requestCount": self.request_count,
            "methods": list(self.methods),
            "paths": list(self.paths),
        }


@dataclass
class ApiInfo:
    """An API endpoint identified by its method and path.

    Everything except ``call_count`` is captured from the first matching
    entry.
    """

    method: str
    url: str
    host: str
    path: str
    parameters: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    response_type: str = OTHER_RESPONSE_TYPE
    status_code: int = 0
    call_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "url": self.url,
            "host": self.host,
            "path": self.path,
            "parameters": dict(self.parameters),
            "headers": dict(self.headers),
            "responseType": self.response_type,
            "statusCode": self.status_code,
            "callCount": self.call_count,
        }


@dataclass
class AnalysisMetadata:
    """Descriptive information about one analyzed HAR file."""

    file_name: str
    analysis_time: datetime
    total_requests: int = 0
    unique_hosts: int = 0
    time_span: str = ""
    browser_info: str = ""
    creator_info: str = ""
    har_version: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "fileName": self.file_name,
            "analysisTime": self.analysis_time.isoformat(),
            "totalRequests": self.total_requests,
            "uniqueHosts": self.unique_hosts,
            "timeSpan": self.time_span,
            "browserInfo": self.browser_info,
            "creatorInfo": self.creator_info,
            "harVersion": self.har_version,
        }


@dataclass
class ExtractedData:
    """Frequency maps collected over all entries of a file."""

    parameters: dict[str, int] = field(default_factory=dict)
    headers: dict[str, int] = field(default_factory=dict)
    response_types: dict[str, int] = field(default_factory=dict)
    status_codes: dict[str, int] = field(default_factory=dict)
    methods: dict[str, int] = field(default_factory=dict)
    content_types: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "parameters": dict(self.parameters),
            "headers": dict(self.headers),
            "responseTypes": dict(self.response_types),
            "statusCodes": dict(self.status_codes),
            "methods": dict(self.methods),
            "contentTypes": dict(self.content_types),
        }


@dataclass
class CodeTemplates:
    """Illustrative code snippets derived from an analysis."""

    data_classes: list[str] = field(default_factory=list)
    api_endpoints: list[str] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "dataClasses": list(self.data_classes),
            "apiEndpoints": list(self.api_endpoints),
            "headers": list(self.headers),
        }


@dataclass
class AnalysisResult:
    """Aggregate statistics for one HAR file.

    Attributes:
        metadata: File-level information and totals.
        hosts: Host records, most requested first.
        apis: API records, most called first.
        extracted: Frequency maps.
        templates: Generated code snippets.
    """

    metadata: AnalysisMetadata
    hosts: list[HostInfo] = field(default_factory=list)
    apis: list[ApiInfo] = field(default_factory=list)
    extracted: ExtractedData = field(default_factory=ExtractedData)
    templates: CodeTemplates = field(default_factory=CodeTemplates)

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase document written to ``*_analysis_*.json``."""
        return {
            "metadata": self.metadata.to_dict(),
            "hosts": [host.to_dict() for host in self.hosts],
            "apis": [api.to_dict() for api in self.apis],
            "extractedData": self.extracted.to_dict(),
            "codeTemplates": self.templates.to_dict(),
        }


def is_important_header(name: str) -> bool:
    """Check if a header name contains any important keyword (case-insensitive)."""
    lowered = name.lower()
    return any(keyword in lowered for keyword in IMPORTANT_HEADER_KEYWORDS)


def simplify_content_type(mime_type: str) -> str:
    """Map a raw MIME string to a coarse response type label.

    Substrings are tested in a fixed priority order, so
    ``"application/json; charset=text"`` is ``JSON``, not ``Text``.
    """
    for needle, label in RESPONSE_TYPE_RULES:
        if needle in mime_type:
            return label
    return OTHER_RESPONSE_TYPE


def parse_timestamp(started: str) -> datetime | None:
    """Parse an RFC 3339 ``startedDateTime``.

    Returns:
        Timezone-aware datetime, or None if the value is empty, malformed
        or has no UTC offset.
    """
    match = RFC3339_REGEX.fullmatch(started)
    if match is None:
        LOG.debug("timestamp_parse_failed", timestamp=started)
        return None

    year, month, day, hour, minute, second, fraction, sign, off_h, off_m = match.groups()
    offset = timedelta()
    if sign:
        offset = timedelta(hours=int(off_h), minutes=int(off_m))
        if sign == "-":
            offset = -offset
    try:
        return datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second),
            int((fraction or "0")[:6].ljust(6, "0")),
            tzinfo=timezone(offset),
        )
    except ValueError:
        LOG.debug("timestamp_parse_failed", timestamp=started)
        return None


def format_time_span(start: datetime | None, end: datetime | None) -> str:
    """Render ``HH:MM:SS - HH:MM:SS (N.N minutes)``, or ``""`` without timestamps."""
    if start is None or end is None:
        return ""
    minutes = (end - start).total_seconds() / 60
    return f"{start.strftime(TIME_FORMAT)} - {end.strftime(TIME_FORMAT)} ({minutes:.1f} minutes)"


def _increment(counts: dict[str, int], key: str) -> None:
    counts[key] = counts.get(key, 0) + 1


def _add_unique(values: list[str], value: str) -> None:
    if value not in values:
        values.append(value)


class _Aggregator:
    """Accumulator for one pass over a document's entries."""

    def __init__(self) -> None:
        self.hosts: dict[str, HostInfo] = {}
        self.apis: dict[tuple[str, str], ApiInfo] = {}
        self.extracted = ExtractedData()
        self.start: datetime | None = None
        self.end: datetime | None = None

    def add(self, entry: HAREntry) -> None:
        request = entry.request
        response = entry.response
        method = request.method
        url = request.url
        host = extract_host(url)
        path = extract_path(url)

        timestamp = parse_timestamp(entry.started_date_time)
        if timestamp is not None:
            if self.start is None or timestamp < self.start:
                self.start = timestamp
            if self.end is None or timestamp > self.end:
                self.end = timestamp

        if host:
            host_info = self.hosts.get(host)
            if host_info is None:
                host_info = self.hosts[host] = HostInfo(host=host)
            host_info.request_count += 1
            _add_unique(host_info.methods, method)
            _add_unique(host_info.paths, path)

        extracted = self.extracted
        _increment(extracted.methods, method)
        _increment(extracted.status_codes, str(response.status))
        for header in request.headers:
            _increment(extracted.headers, header.name)
        for param in request.query_string:
            _increment(extracted.parameters, param.name)

        if request.post_data is not None and request.post_data.text:
            extract_body_parameters(request.post_data.text, extracted.parameters)

        mime_type = response.content.mime_type
        response_type = simplify_content_type(mime_type)
        if mime_type:
            _increment(extracted.content_types, mime_type)
            _increment(extracted.response_types, response_type)

        key = (method, path)
        api = self.apis.get(key)
        if api is None:
            api = self.apis[key] = ApiInfo(
                method=method,
                url=url,
                host=host,
                path=path,
                response_type=response_type,
                status_code=response.status,
            )
            for param in request.query_string:
                api.parameters.setdefault(param.name, param.value)
            for header in request.headers:
                if is_important_header(header.name):
                    api.headers[header.name] = header.value
        api.call_count += 1


def analyze_document(
    document: HARDocument,
    file_name: str,
    now: datetime | None = None,
) -> AnalysisResult:
    """Aggregate a decoded HAR document.

    Code templates are left empty; see
    :func:`harscope.har.generator.generate_code_templates`.

    Args:
        document: Decoded HAR capture.
        file_name: Base name of the analyzed file, recorded in the metadata.
        now: Analysis timestamp. Defaults to the current local time.

    Returns:
        AnalysisResult with hosts and APIs sorted by descending count.
        Ties keep first-seen order.
    """
    aggregator = _Aggregator()
    for entry in document.entries:
        aggregator.add(entry)

    hosts = sorted(aggregator.hosts.values(), key=lambda h: h.request_count, reverse=True)
    apis = sorted(aggregator.apis.values(), key=lambda a: a.call_count, reverse=True)

    metadata = AnalysisMetadata(
        file_name=file_name,
        analysis_time=now or datetime.now().astimezone(),
        total_requests=len(document.entries),
        unique_hosts=len(aggregator.hosts),
        time_span=format_time_span(aggregator.start, aggregator.end),
        browser_info=document.browser.describe(),
        creator_info=document.creator.describe(),
        har_version=document.version,
    )

    LOG.info(
        "har_document_analyzed",
        file_name=file_name,
        entries=metadata.total_requests,
        hosts=metadata.unique_hosts,
        apis=len(apis),
    )

    return AnalysisResult(
        metadata=metadata,
        hosts=hosts,
        apis=apis,
        extracted=aggregator.extracted,
    )
