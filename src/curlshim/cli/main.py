# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""curlshim CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import CurlSettings, load_settings
from ..dispatcher import CurlDispatcher
from ..errors import CurlError
from ..http.command import build_command
from ..http.context import CallContext
from ..http.models import Response, ResponseType
from ..http.options import normalize_options
from ..http.runner import create_default_runner
from ..http.stream import ResponseStream
from ..log import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="curlshim",
        description="Issue an HTTP request through curl",
        epilog=(
            "Known limitation: curl prints its timing fields after the body, but they are "
            "parsed from the start of the output. With a real curl binary, a json, text or "
            "buffer response with a non-empty body fails with a trailer parse error. Use "
            "--response-type stream to fetch bodies, or --dry-run to inspect the command."
        ),
    )
    parser.add_argument("url", help="Target URL")
    parser.add_argument("-X", "--request", dest="method", default="GET", help="HTTP method (default: GET)")
    parser.add_argument(
        "-H",
        "--header",
        dest="headers",
        action="append",
        default=[],
        metavar="'NAME: VALUE'",
        help="Extra request header, may be repeated",
    )
    parser.add_argument("-d", "--data", help="Request body")
    parser.add_argument(
        "--response-type",
        choices=[t.value for t in ResponseType],
        default=None,
        help=(
            "How to interpret the response body (default: from CURLSHIM_RESPONSE_TYPE or json); "
            "only stream handles non-empty bodies from a real curl"
        ),
    )
    parser.add_argument("--timeout", type=float, default=None, help="Seconds before curl gives up")
    parser.add_argument("--retries", type=int, default=None, help="Retries after the first attempt")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the response and its metadata as JSON",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log the curl command and each attempt")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the curl command instead of running it (spooled files are removed on exit)",
    )
    return parser


def parse_header_args(values: list[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"invalid header {raw!r}, expected 'NAME: VALUE'")
        headers[name.strip()] = value.strip()
    return headers


def _jsonable(data: Any) -> Any:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("utf-8", errors="replace")
    return data


def _print_json(response: Response) -> None:
    data = response.data
    if isinstance(data, ResponseStream):
        with data:
            data = data.read()
    payload = {
        "data": _jsonable(data),
        "status": response.status,
        "status_text": response.status_text,
        "metadata": response.metadata.to_dict(),
    }
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _print_data(response: Response) -> None:
    data = response.data
    if isinstance(data, ResponseStream):
        with data:
            for chunk in data:
                sys.stdout.buffer.write(chunk)
        sys.stdout.buffer.flush()
        return
    if isinstance(data, (bytes, bytearray)):
        sys.stdout.buffer.write(bytes(data))
        sys.stdout.buffer.flush()
        return
    if isinstance(data, (dict, list)):
        print(json.dumps(data, indent=2))
        return
    print(data)


def _print_command(options: dict[str, Any], dispatcher: CurlDispatcher, settings: CurlSettings) -> None:
    context = CallContext.open(dispatcher.defaults, options, settings)
    with context.temp_files:
        command = build_command(context.config, context.metadata, context.temp_files, settings)
        print(command.as_shell())


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    settings: CurlSettings = load_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    try:
        headers = parse_header_args(args.headers)
    except ValueError as exc:
        parser.error(str(exc))

    options = normalize_options(
        url=args.url,
        method=args.method,
        headers=headers,
        data=args.data,
        response_type=args.response_type,
        timeout=args.timeout,
        max_retries=args.retries,
    )
    dispatcher = CurlDispatcher(runner=create_default_runner(), settings=settings)

    if args.dry_run:
        _print_command(options, dispatcher, settings)
        return 0

    try:
        response = dispatcher.request(options)
    except CurlError as exc:
        print(f"curlshim: {exc}", file=sys.stderr)
        return 1

    if args.json:
        _print_json(response)
    else:
        _print_data(response)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
