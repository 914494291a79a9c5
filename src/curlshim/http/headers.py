# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header helpers.

Header names keep the caller's casing all the way to curl's ``-H`` flags. Merging is
key-wise on the exact name, so ``Accept`` and ``accept`` are two distinct entries and
curl sends both.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """
    Best-effort coercion of "dict-like" header containers into a Mapping.

    Accepts plain dicts, objects exposing ``.items()`` (httpx.Headers, HTTPMessage)
    and iterables of pairs.
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        try:
            return dict(items())
        except (TypeError, ValueError):
            pass

    try:
        return dict(headers)
    except (TypeError, ValueError):
        return None


def merge_headers(*layers: Any) -> dict[str, str]:
    """Merge header mappings left to right; later layers win on key collision."""
    merged: dict[str, str] = {}
    for layer in layers:
        coerced = _coerce_headers_mapping(layer)
        if not coerced:
            continue
        for key, value in coerced.items():
            if key is None:
                continue
            name = str(key).strip()
            if not name:
                continue
            merged[name] = "" if value is None else str(value)
    return merged


def format_header(name: str, value: str) -> str:
    """Render one header as the argument to curl's ``-H``."""
    return f"{name}: {value}"


__all__ = ["format_header", "merge_headers"]
