# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    OUTPUT_LIMIT = "OUTPUT_LIMIT"
    SPAWN_ERROR = "SPAWN_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


# curl exit codes, see `man curl` EXIT CODES.
_DNS_EXIT_CODES = frozenset({5, 6})
_CONNECTION_EXIT_CODES = frozenset({7, 52, 55, 56})
_TIMEOUT_EXIT_CODES = frozenset({28})
_SSL_EXIT_CODES = frozenset({35, 51, 58, 59, 60, 77, 80, 82, 83, 90, 91})


def categorize_exit_code(returncode: int | None) -> ErrorCategory:
    """Map a curl exit code to ErrorCategory."""
    if returncode is None:
        return ErrorCategory.UNKNOWN_ERROR
    if returncode == 0:
        return ErrorCategory.NONE
    if returncode in _DNS_EXIT_CODES:
        return ErrorCategory.DNS_ERROR
    if returncode in _CONNECTION_EXIT_CODES:
        return ErrorCategory.CONNECTION_ERROR
    if returncode in _TIMEOUT_EXIT_CODES:
        return ErrorCategory.TIMEOUT
    if returncode in _SSL_EXIT_CODES:
        return ErrorCategory.SSL_ERROR
    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Request timed out",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.OUTPUT_LIMIT: "Response exceeded the output buffer limit",
        ErrorCategory.SPAWN_ERROR: "Could not start curl",
        ErrorCategory.UNKNOWN_ERROR: "curl reported an error",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed")


class CurlError(Exception):
    """Base exception for all curlshim errors."""


class CurlExecutionError(CurlError):
    """A single curl invocation failed (spawn failure, non-zero exit, or output overflow)."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        stderr: str = "",
        category: ErrorCategory | None = None,
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
        self.category = category if category is not None else categorize_exit_code(returncode)

    @property
    def reason(self) -> str:
        return error_category_to_reason(self.category)


class CurlRetryError(CurlError):
    """Every allowed attempt failed."""

    def __init__(self, retries: int, last_error: BaseException) -> None:
        super().__init__(f"curl command failed after {retries} retries: {last_error}")
        self.retries = retries
        self.last_error = last_error


class TrailerParseError(CurlError):
    """The timing trailer in curl's output could not be parsed."""


__all__ = [
    "CurlError",
    "CurlExecutionError",
    "CurlRetryError",
    "ErrorCategory",
    "TrailerParseError",
    "categorize_exit_code",
    "error_category_to_reason",
]
