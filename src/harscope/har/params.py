"""Request body parameter extraction.

Bodies are classified by shape, not by declared MIME type: a body that
decodes to a JSON object is flattened into dotted/indexed key names,
anything else that looks like ``a=1&b=2`` is split as form data.
"""

from __future__ import annotations

import json
from collections.abc import MutableMapping
from typing import Any


def _count(counts: MutableMapping[str, int], key: str) -> None:
    counts[key] = counts.get(key, 0) + 1


def _slots(data: Any, prefix: str) -> list[tuple[str, Any]]:
    if isinstance(data, dict):
        return [(f"{prefix}.{key}" if prefix else key, value) for key, value in data.items()]
    if isinstance(data, list):
        return [(f"{prefix}[{index}]", item) for index, item in enumerate(data)]
    return []


def flatten_json_keys(data: Any, prefix: str, counts: MutableMapping[str, int]) -> None:
    """Count every named slot below *data*.

    Object members become ``prefix.key`` (``key`` at the top level), array
    elements become ``prefix[i]``. Keys are counted in document order
    (depth first); nesting depth is bounded only by memory.

    Args:
        data: Decoded JSON value.
        prefix: Key name of *data* itself, ``""`` for the document root.
        counts: Accumulator mapping key name to occurrence count, updated in place.
    """
    stack = _slots(data, prefix)
    stack.reverse()
    while stack:
        key, value = stack.pop()
        # A slot holding an array is represented by its indexed elements only.
        if not isinstance(value, list):
            _count(counts, key)
        children = _slots(value, key)
        children.reverse()
        stack.extend(children)


def extract_form_keys(text: str, counts: MutableMapping[str, int]) -> None:
    """Count the keys of a form-encoded body; pairs without ``=`` are skipped."""
    for pair in text.split("&"):
        key, sep, _ = pair.partition("=")
        if sep:
            _count(counts, key)


def extract_body_parameters(text: str, counts: MutableMapping[str, int]) -> None:
    """Count the parameter names found in a request body.

    Args:
        text: Raw request body.
        counts: Running parameter-name counts, updated in place.
    """
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        data = None

    if isinstance(data, dict):
        flatten_json_keys(data, "", counts)
        return

    if "=" in text and "&" in text:
        extract_form_keys(text, counts)
