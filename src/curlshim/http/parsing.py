# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Parsing of curl's captured output into metadata and response data.

Captured stdout is treated as whitespace-separated tokens: the first six are the
``--write-out`` fields (see ``command.WRITE_OUT_FORMAT``) and the rest, joined with
single spaces, is the body. curl itself writes ``--write-out`` after the body, so a
non-streamed body whose leading tokens look like trailer fields will be misread.
Streamed responses are unaffected because their body goes to a file.
With a real curl binary this means every non-streamed call with a non-empty body
raises TrailerParseError.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from ..errors import TrailerParseError
from .models import RequestMetadata, ResponseType, Timings
from .stream import ResponseStream

TRAILER_FIELD_COUNT = 6


@dataclass(frozen=True)
class Trailer:
    timings: Timings
    redirects: int
    final_url: str
    body: str


def _decode(stdout: bytes | str) -> str:
    if isinstance(stdout, str):
        return stdout
    return stdout.decode("utf-8", errors="replace")


def parse_trailer(stdout: bytes | str) -> Trailer:
    tokens = _decode(stdout).split()
    if len(tokens) < TRAILER_FIELD_COUNT:
        raise TrailerParseError(f"expected {TRAILER_FIELD_COUNT} trailer fields, got {len(tokens)}")
    dns, connect, ttfb, total, redirects, final_url = tokens[:TRAILER_FIELD_COUNT]
    try:
        timings = Timings(dns=float(dns), connect=float(connect), ttfb=float(ttfb), total=float(total))
        redirect_count = int(redirects)
    except ValueError as exc:
        raise TrailerParseError(f"malformed trailer: {' '.join(tokens[:TRAILER_FIELD_COUNT])!r}") from exc
    return Trailer(
        timings=timings,
        redirects=redirect_count,
        final_url=final_url,
        body=" ".join(tokens[TRAILER_FIELD_COUNT:]),
    )


def apply_trailer(trailer: Trailer, metadata: RequestMetadata) -> None:
    metadata.timings = trailer.timings
    metadata.redirects = trailer.redirects
    metadata.final_url = trailer.final_url


def decode_body(text: str, response_type: ResponseType) -> Any:
    """Interpret body text for the non-streamed response types."""
    if response_type is ResponseType.JSON:
        try:
            return json.loads(text)
        except ValueError:
            return text
    if response_type is ResponseType.BUFFER:
        return text.encode("utf-8")
    return text


def parse_output(stdout: bytes | str, response_type: ResponseType, metadata: RequestMetadata) -> Any:
    """Populate ``metadata`` from the trailer and return the response data."""
    trailer = parse_trailer(stdout)
    apply_trailer(trailer, metadata)
    if response_type is ResponseType.STREAM:
        data: Any = ResponseStream(metadata.output_file or "")
    else:
        data = decode_body(trailer.body, response_type)
    metadata.finish()
    return data


__all__ = [
    "TRAILER_FIELD_COUNT",
    "Trailer",
    "apply_trailer",
    "decode_body",
    "parse_output",
    "parse_trailer",
]
