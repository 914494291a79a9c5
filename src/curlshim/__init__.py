# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
curlshim package entrypoint.

A request/response HTTP client API whose transport is the curl binary, run as a
child process. Process invocation is abstracted behind an injectable runner, and
requests, metadata and responses are modeled with typed dataclasses.
"""

from .compat import create, delete, get, patch, post, put, request
from .config import CurlSettings, load_settings
from .dispatcher import CurlDispatcher
from .errors import (
    CurlError,
    CurlExecutionError,
    CurlRetryError,
    ErrorCategory,
    TrailerParseError,
)
from .http import (
    CommandRunner,
    CompletedCommand,
    FormData,
    RequestConfig,
    RequestMetadata,
    Response,
    ResponseStream,
    ResponseType,
    StubRunner,
    SubprocessRunner,
)
from .log import setup_logging
from .version import __version__

__all__ = [
    "CommandRunner",
    "CompletedCommand",
    "CurlDispatcher",
    "CurlError",
    "CurlExecutionError",
    "CurlRetryError",
    "CurlSettings",
    "ErrorCategory",
    "FormData",
    "RequestConfig",
    "RequestMetadata",
    "Response",
    "ResponseStream",
    "ResponseType",
    "StubRunner",
    "SubprocessRunner",
    "TrailerParseError",
    "create",
    "delete",
    "get",
    "load_settings",
    "patch",
    "post",
    "put",
    "request",
    "setup_logging",
    "__version__",
]
