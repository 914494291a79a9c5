# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request/response data models used by the dispatcher."""

from __future__ import annotations

import time
from collections.abc import Iterator, Mapping
from dataclasses import asdict, dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from ..config import CurlSettings

Headers = dict[str, str]

BINARY_TYPES = (bytes, bytearray, memoryview)


class ResponseType(str, Enum):
    TEXT = "text"
    JSON = "json"
    BUFFER = "buffer"
    STREAM = "stream"

    @classmethod
    def coerce(cls, value: ResponseType | str) -> ResponseType:
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class FormData:
    """Ordered multipart form fields. Binary values are uploaded from temp files, text is sent literally."""

    def __init__(self, fields: dict[str, Any] | list[tuple[str, Any]] | None = None):
        self._fields: list[tuple[str, Any]] = []
        if isinstance(fields, dict):
            fields = list(fields.items())
        for name, value in fields or []:
            self.append(name, value)

    def append(self, name: str, value: Any) -> None:
        self._fields.append((str(name), value))

    def entries(self) -> Iterator[tuple[str, Any]]:
        return iter(list(self._fields))

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return self.entries()

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        names = ", ".join(name for name, _ in self._fields)
        return f"FormData({names})"


@dataclass(frozen=True)
class RequestConfig:
    """Effective configuration of a single call, after merging defaults and per-call options."""

    url: str | None = None
    method: str = "GET"
    data: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
    response_type: ResponseType = ResponseType.JSON
    timeout: float | None = None
    max_retries: int = 0
    base_url: str | None = None
    params: Any = None
    verify_ssl: bool = True
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # read-only copy; instance defaults are shared by every call
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))


@dataclass
class Timings:
    """curl-reported phase timings, in seconds."""

    dns: float | None = None
    connect: float | None = None
    ttfb: float | None = None
    total: float | None = None


@dataclass
class RequestMetadata:
    """Per-call bookkeeping, created fresh for every request."""

    start_time: float = field(default_factory=time.time)
    end_time: float | None = None
    duration: float | None = None
    retries: int = 0
    redirects: int = 0
    temp_files: int = 0
    final_url: str | None = None
    output_file: str | None = None
    timings: Timings = field(default_factory=Timings)

    def finish(self) -> None:
        self.end_time = time.time()
        self.duration = self.end_time - self.start_time

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Response:
    """Response record in the shape callers of the replaced client expect.

    ``status``, ``status_text`` and ``headers`` are not read from curl's output: the
    trailer carries timings, redirect count and effective URL only.
    """

    data: Any
    config: RequestConfig
    metadata: RequestMetadata
    status: int = 200
    status_text: str = "OK"
    headers: Headers = field(default_factory=dict)

    def close(self) -> None:
        """Release the underlying stream, if any."""
        closer = getattr(self.data, "close", None)
        if callable(closer):
            closer()


@dataclass
class RetryConfig:
    """Retry policy for curl invocations derived from CurlSettings."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    initial_delay: float = 1.0

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait before ``attempt`` (attempt 0 never waits)."""
        if attempt <= 0:
            return 0.0
        return self.initial_delay * (self.backoff_factor**attempt)

    @classmethod
    def from_settings(cls, settings: CurlSettings, *, max_retries: int | None = None) -> RetryConfig:
        """Build a retry config from the shared CurlSettings."""
        retries = settings.max_retries if max_retries is None else max_retries
        return cls(
            max_retries=max(0, retries),
            backoff_factor=settings.backoff_factor,
            initial_delay=settings.initial_delay,
        )
