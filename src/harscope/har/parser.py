"""HAR file parser.

Decodes HAR (HTTP Archive) documents into immutable Python objects for
analysis. Every field is optional except ``log.entries``: absent or null
values fall back to empty strings, zeros and empty tuples, and unknown
fields are ignored.

HAR format specification: http://www.softwareishard.com/blog/har-12-spec/
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from harscope.exceptions import DecodeError, ReadError
from harscope.logging import get_logger

LOG = get_logger(__name__)


@dataclass(frozen=True)
class HARNameValue:
    """A ``{name, value}`` pair, used for headers and query parameters."""

    name: str
    value: str = ""


@dataclass(frozen=True)
class HARCreator:
    """Name and version of the tool (creator or browser) that wrote the HAR."""

    name: str = ""
    version: str = ""

    def describe(self) -> str:
        """Return ``"name version"``, skipping empty parts."""
        return " ".join(part for part in (self.name, self.version) if part)


@dataclass(frozen=True)
class HARPage:
    """Page record from ``log.pages``."""

    id: str = ""
    title: str = ""
    started_date_time: str = ""
    on_content_load: float = 0.0
    on_load: float = 0.0


@dataclass(frozen=True)
class HARPostData:
    """Request body as recorded in ``request.postData``."""

    mime_type: str = ""
    text: str = ""


@dataclass(frozen=True)
class HARRequest:
    """Parsed HTTP request from HAR entry."""

    method: str = ""
    url: str = ""
    http_version: str = ""
    headers: tuple[HARNameValue, ...] = ()
    query_string: tuple[HARNameValue, ...] = ()
    post_data: HARPostData | None = None
    headers_size: float = 0.0
    body_size: float = 0.0


@dataclass(frozen=True)
class HARContent:
    """Response body description from ``response.content``."""

    size: float = 0.0
    mime_type: str = ""
    text: str = ""


@dataclass(frozen=True)
class HARResponse:
    """Parsed HTTP response from HAR entry."""

    status: int = 0
    status_text: str = ""
    http_version: str = ""
    headers: tuple[HARNameValue, ...] = ()
    content: HARContent = field(default_factory=HARContent)
    redirect_url: str = ""
    headers_size: float = 0.0
    body_size: float = 0.0


@dataclass(frozen=True)
class HARTimings:
    """Timing breakdown of an entry, in milliseconds."""

    blocked: float = 0.0
    dns: float = 0.0
    connect: float = 0.0
    send: float = 0.0
    wait: float = 0.0
    receive: float = 0.0
    ssl: float = 0.0


@dataclass(frozen=True)
class HAREntry:
    """Single request/response pair from HAR file."""

    request: HARRequest
    response: HARResponse
    started_date_time: str = ""  # raw ISO 8601 string, parsed by the analyzer
    time_ms: float = 0.0  # Total time in milliseconds
    timings: HARTimings = field(default_factory=HARTimings)


@dataclass(frozen=True)
class HARDocument:
    """A decoded HAR capture.

    Attributes:
        entries: Request/response pairs, in original file order.
        version: HAR format version string.
        creator: Tool that produced the capture.
        browser: Browser the capture was recorded in.
        pages: Page records, if the capture has any.
    """

    entries: tuple[HAREntry, ...]
    version: str = ""
    creator: HARCreator = field(default_factory=HARCreator)
    browser: HARCreator = field(default_factory=HARCreator)
    pages: tuple[HARPage, ...] = ()


def _object(value: Any, where: str) -> dict[str, Any]:
    """Return *value* as a JSON object; null becomes empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DecodeError(f"'{where}' must be an object")
    return value


def _array(value: Any, where: str) -> list[Any]:
    """Return *value* as a JSON array; null becomes empty."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"'{where}' must be an array")
    return value


def _string(value: Any, where: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"'{where}' must be a string")
    return value


def _number(value: Any, where: str) -> float:
    if value is None:
        return 0.0
    # bool is an int subclass but never a valid HAR number
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise DecodeError(f"'{where}' must be a number")
    return float(value)


def _integer(value: Any, where: str) -> int:
    number = _number(value, where)
    if not number.is_integer():
        raise DecodeError(f"'{where}' must be an integer")
    return int(number)


def _parse_pairs(items: Any, where: str) -> tuple[HARNameValue, ...]:
    """Convert a HAR ``[{name, value}, ...]`` array into a tuple of pairs.

    Duplicates are preserved, since every occurrence is counted.
    """
    pairs = []
    for idx, item in enumerate(_array(items, where)):
        data = _object(item, f"{where}[{idx}]")
        pairs.append(
            HARNameValue(
                name=_string(data.get("name"), f"{where}[{idx}].name"),
                value=_string(data.get("value"), f"{where}[{idx}].value"),
            )
        )
    return tuple(pairs)


def _parse_creator(data: Any, where: str) -> HARCreator:
    obj = _object(data, where)
    return HARCreator(
        name=_string(obj.get("name"), f"{where}.name"),
        version=_string(obj.get("version"), f"{where}.version"),
    )


def _parse_page(data: Any, where: str) -> HARPage:
    obj = _object(data, where)
    timings = _object(obj.get("pageTimings"), f"{where}.pageTimings")
    return HARPage(
        id=_string(obj.get("id"), f"{where}.id"),
        title=_string(obj.get("title"), f"{where}.title"),
        started_date_time=_string(obj.get("startedDateTime"), f"{where}.startedDateTime"),
        on_content_load=_number(timings.get("onContentLoad"), f"{where}.onContentLoad"),
        on_load=_number(timings.get("onLoad"), f"{where}.onLoad"),
    )


def _parse_request(data: Any, where: str) -> HARRequest:
    """Parse request section of HAR entry.

    Args:
        data: Request dict from HAR entry.
        where: Location of the request, used in error messages.

    Returns:
        Parsed HARRequest object.
    """
    obj = _object(data, where)

    post_data = None
    if obj.get("postData") is not None:
        post_obj = _object(obj["postData"], f"{where}.postData")
        post_data = HARPostData(
            mime_type=_string(post_obj.get("mimeType"), f"{where}.postData.mimeType"),
            text=_string(post_obj.get("text"), f"{where}.postData.text"),
        )

    return HARRequest(
        method=_string(obj.get("method"), f"{where}.method"),
        url=_string(obj.get("url"), f"{where}.url"),
        http_version=_string(obj.get("httpVersion"), f"{where}.httpVersion"),
        headers=_parse_pairs(obj.get("headers"), f"{where}.headers"),
        query_string=_parse_pairs(obj.get("queryString"), f"{where}.queryString"),
        post_data=post_data,
        headers_size=_number(obj.get("headersSize"), f"{where}.headersSize"),
        body_size=_number(obj.get("bodySize"), f"{where}.bodySize"),
    )


def _parse_response(data: Any, where: str) -> HARResponse:
    """Parse response section of HAR entry.

    Args:
        data: Response dict from HAR entry.
        where: Location of the response, used in error messages.

    Returns:
        Parsed HARResponse object.
    """
    obj = _object(data, where)
    content = _object(obj.get("content"), f"{where}.content")

    return HARResponse(
        status=_integer(obj.get("status"), f"{where}.status"),
        status_text=_string(obj.get("statusText"), f"{where}.statusText"),
        http_version=_string(obj.get("httpVersion"), f"{where}.httpVersion"),
        headers=_parse_pairs(obj.get("headers"), f"{where}.headers"),
        content=HARContent(
            size=_number(content.get("size"), f"{where}.content.size"),
            mime_type=_string(content.get("mimeType"), f"{where}.content.mimeType"),
            text=_string(content.get("text"), f"{where}.content.text"),
        ),
        redirect_url=_string(obj.get("redirectURL"), f"{where}.redirectURL"),
        headers_size=_number(obj.get("headersSize"), f"{where}.headersSize"),
        body_size=_number(obj.get("bodySize"), f"{where}.bodySize"),
    )


def _parse_timings(data: Any, where: str) -> HARTimings:
    obj = _object(data, where)
    values = {
        name: _number(obj.get(name), f"{where}.{name}")
        for name in ("blocked", "dns", "connect", "send", "wait", "receive", "ssl")
    }
    return HARTimings(**values)


def _parse_entry(data: Any, idx: int) -> HAREntry:
    where = f"entries[{idx}]"
    obj = _object(data, where)
    return HAREntry(
        request=_parse_request(obj.get("request"), f"{where}.request"),
        response=_parse_response(obj.get("response"), f"{where}.response"),
        started_date_time=_string(obj.get("startedDateTime"), f"{where}.startedDateTime"),
        time_ms=_number(obj.get("time"), f"{where}.time"),
        timings=_parse_timings(obj.get("timings"), f"{where}.timings"),
    )


def validate_har_schema(data: Any) -> None:
    """Validate HAR data has required structure.

    Args:
        data: Parsed JSON data from HAR file.

    Raises:
        DecodeError: If required fields are missing.
    """
    if not isinstance(data, dict):
        raise DecodeError("HAR file must contain a JSON object")

    if "log" not in data:
        raise DecodeError("HAR file must contain 'log' object")

    log = data["log"]
    if not isinstance(log, dict):
        raise DecodeError("'log' must be an object")

    if "entries" not in log:
        raise DecodeError("HAR log must contain 'entries' array")

    if not isinstance(log["entries"], list):
        raise DecodeError("'entries' must be an array")


def _build_document(data: Any) -> HARDocument:
    """Build a HARDocument from decoded JSON."""
    validate_har_schema(data)
    log = data["log"]

    return HARDocument(
        entries=tuple(_parse_entry(entry, idx) for idx, entry in enumerate(log["entries"])),
        version=_string(log.get("version"), "log.version"),
        creator=_parse_creator(log.get("creator"), "log.creator"),
        browser=_parse_creator(log.get("browser"), "log.browser"),
        pages=tuple(
            _parse_page(page, f"pages[{idx}]")
            for idx, page in enumerate(_array(log.get("pages"), "log.pages"))
        ),
    )


def parse_har_string(content: str) -> HARDocument:
    """Parse HAR content from a string.

    Args:
        content: HAR file content as string.

    Returns:
        The decoded HARDocument.

    Raises:
        DecodeError: If content is not valid JSON or does not have the
            expected HAR shape.
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Invalid JSON in HAR content: {exc}") from exc
    except RecursionError as exc:
        raise DecodeError("Invalid JSON in HAR content: nested too deeply") from exc

    return _build_document(data)


def parse_har_bytes(raw: bytes) -> HARDocument:
    """Parse HAR content from raw bytes (UTF-8, optionally with a BOM).

    Raises:
        DecodeError: If the bytes are not UTF-8 text holding a valid HAR document.
    """
    try:
        content = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"HAR content is not valid UTF-8: {exc}") from exc
    return parse_har_string(content)


def parse_har_file(filepath: Path | str) -> HARDocument:
    """Read and parse a HAR file.

    Args:
        filepath: Path to HAR file.

    Returns:
        The decoded HARDocument.

    Raises:
        ReadError: If the file cannot be read.
        DecodeError: If the file content is not a valid HAR document.
    """
    filepath = Path(filepath)

    try:
        raw = filepath.read_bytes()
    except OSError as exc:
        raise ReadError(f"Failed to read HAR file: {exc}", path=filepath) from exc

    try:
        document = parse_har_bytes(raw)
    except DecodeError as exc:
        raise DecodeError(f"Failed to decode HAR file: {exc}", path=filepath) from exc

    LOG.info(
        "har_file_parsed",
        filepath=str(filepath),
        entries=len(document.entries),
        pages=len(document.pages),
    )
    return document
