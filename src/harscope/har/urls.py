"""Host and path extraction from absolute request URLs.

Both helpers use plain pattern matches instead of ``urllib.parse`` so the
authority is reported exactly as captured: no lowercasing, no default-port
stripping. Relative or malformed URLs are not errors; they yield an empty
host and the root path.
"""

from __future__ import annotations

import re

HOST_REGEX = re.compile(r"https?://([^/]+)")
PATH_REGEX = re.compile(r"https?://[^/]+(/[^?#]*)")


def extract_host(url: str) -> str:
    """Return the authority of an ``http(s)://`` URL, or ``""``.

    >>> extract_host("https://api.example.com:8443/v1/items?page=2")
    'api.example.com:8443'
    """
    match = HOST_REGEX.match(url)
    return match.group(1) if match else ""


def extract_path(url: str) -> str:
    """Return the path of an ``http(s)://`` URL up to ``?`` or ``#``.

    Falls back to ``/`` when the URL has no path segment.

    >>> extract_path("https://example.com/search?q=har#top")
    '/search'
    >>> extract_path("https://example.com")
    '/'
    """
    match = PATH_REGEX.match(url)
    return match.group(1) if match else "/"
