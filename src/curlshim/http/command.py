# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Translate a merged RequestConfig into a curl argument list."""

from __future__ import annotations

import json
import logging
import shlex
from dataclasses import dataclass
from typing import Any

from ..config import CurlSettings
from .headers import format_header
from .models import BINARY_TYPES, FormData, RequestConfig, RequestMetadata, ResponseType
from .options import resolve_url
from .tempfiles import TempFileSet

logger = logging.getLogger(__name__)

# Field order is fixed; parsing.parse_trailer depends on it.
WRITE_OUT_FORMAT = "%{time_namelookup} %{time_connect} %{time_starttransfer} %{time_total} %{num_redirects} %{url_effective}"


@dataclass(frozen=True)
class CurlCommand:
    """A ready-to-run curl invocation."""

    argv: tuple[str, ...]

    @property
    def url(self) -> str:
        return self.argv[-1]

    def as_shell(self) -> str:
        return shlex.join(self.argv)

    def __str__(self) -> str:
        return self.as_shell()


def serialize_body(data: Any) -> str:
    """Strings pass through, bytes are decoded, anything else becomes compact JSON."""
    if isinstance(data, str):
        return data
    if isinstance(data, BINARY_TYPES):
        return bytes(data).decode("utf-8", errors="replace")
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def _has_body(data: Any) -> bool:
    if data is None:
        return False
    if isinstance(data, (str, *BINARY_TYPES)):
        return len(data) > 0
    if isinstance(data, FormData):
        return len(data) > 0
    return True


def _form_args(form: FormData, metadata: RequestMetadata, temp_files: TempFileSet) -> list[str]:
    args: list[str] = []
    for name, value in form.entries():
        if isinstance(value, BINARY_TYPES):
            path = temp_files.create("upload", bytes(value))
            metadata.temp_files += 1
            args.extend(["-F", f"{name}=@{path}"])
        else:
            # --form-string never treats a leading "@" or "<" as a file reference
            args.extend(["--form-string", f"{name}={value}"])
    return args


def _data_args(
    data: Any,
    metadata: RequestMetadata,
    temp_files: TempFileSet,
    inline_limit: int,
) -> list[str]:
    text = serialize_body(data)
    if len(text) > inline_limit:
        path = temp_files.create("data", text)
        metadata.temp_files += 1
        # --data-binary keeps CR and LF, which --data strips from files
        return ["--data-binary", f"@{path}"]
    return ["--data-raw", text]


def build_command(
    config: RequestConfig,
    metadata: RequestMetadata,
    temp_files: TempFileSet,
    settings: CurlSettings,
) -> CurlCommand:
    """
    Build the curl invocation for ``config``.

    Spooled payloads and the streamed-output file are registered in ``temp_files``;
    the caller owns their cleanup.
    """
    argv: list[str] = [settings.curl_path, "--silent", "--show-error", "--write-out", WRITE_OUT_FORMAT]

    argv.extend(["-X", str(config.method or "GET").upper()])
    for name, value in config.headers.items():
        argv.extend(["-H", format_header(name, value)])
    argv.append("--location")

    if config.timeout is not None and config.timeout > 0:
        argv.extend(["--max-time", f"{float(config.timeout):g}"])
    if not config.verify_ssl:
        argv.append("--insecure")

    if config.response_type is ResponseType.STREAM:
        output_file = temp_files.create("response")
        metadata.output_file = output_file
        argv.extend(["-o", output_file])

    if _has_body(config.data):
        if isinstance(config.data, FormData):
            argv.extend(_form_args(config.data, metadata, temp_files))
        else:
            argv.extend(_data_args(config.data, metadata, temp_files, settings.inline_body_limit))

    argv.append(resolve_url(config))
    command = CurlCommand(argv=tuple(argv))
    logger.debug("Built curl command: %s", command.as_shell())
    return command


__all__ = ["WRITE_OUT_FORMAT", "CurlCommand", "build_command", "serialize_body"]
