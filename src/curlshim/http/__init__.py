# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Command building, execution and parsing exports."""

from .adapters import StubRunner, make_output, output_path
from .command import WRITE_OUT_FORMAT, CurlCommand, build_command, serialize_body
from .context import CallContext
from .headers import merge_headers
from .models import (
    FormData,
    Headers,
    RequestConfig,
    RequestMetadata,
    Response,
    ResponseType,
    RetryConfig,
    Timings,
)
from .options import build_default_config, merge_config, normalize_options, resolve_url
from .parsing import Trailer, parse_output, parse_trailer
from .retry import build_default_retry_config, run_with_retries
from .runner import CommandRunner, CompletedCommand, SubprocessRunner, create_default_runner
from .stream import ResponseStream
from .tempfiles import TempFileSet

__all__ = [
    "WRITE_OUT_FORMAT",
    "CallContext",
    "CommandRunner",
    "CompletedCommand",
    "CurlCommand",
    "FormData",
    "Headers",
    "RequestConfig",
    "RequestMetadata",
    "Response",
    "ResponseStream",
    "ResponseType",
    "RetryConfig",
    "StubRunner",
    "SubprocessRunner",
    "TempFileSet",
    "Timings",
    "Trailer",
    "build_command",
    "build_default_config",
    "build_default_retry_config",
    "create_default_runner",
    "make_output",
    "merge_config",
    "merge_headers",
    "normalize_options",
    "output_path",
    "parse_output",
    "parse_trailer",
    "resolve_url",
    "run_with_retries",
    "serialize_body",
]
