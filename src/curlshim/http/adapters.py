# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Programmable CommandRunner implementations for tests and offline use."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Union

from ..config import DEFAULT_MAX_OUTPUT_BYTES
from ..errors import CurlExecutionError, ErrorCategory
from .runner import CommandRunner, CompletedCommand

Outcome = Union[CompletedCommand, bytes, str, BaseException, Callable[[tuple[str, ...]], "Outcome"]]


def make_output(
    body: str | bytes = b"",
    *,
    timings: Sequence[float] = (0.0, 0.0, 0.0, 0.0),
    redirects: int = 0,
    url: str = "http://stub.invalid/",
) -> bytes:
    """Render stdout the way the dispatcher expects it: trailer fields, then body."""
    trailer = " ".join([*(f"{t:g}" for t in timings), str(redirects), url])
    raw_body = body.encode("utf-8") if isinstance(body, str) else bytes(body)
    return trailer.encode("utf-8") + (b" " + raw_body if raw_body else b"")


def output_path(argv: Sequence[str]) -> str | None:
    """Return the ``-o`` target of a curl argv, if any."""
    args = list(argv)
    if "-o" in args:
        index = args.index("-o")
        if index + 1 < len(args):
            return args[index + 1]
    return None


class StubRunner(CommandRunner):
    """
    Deterministic, programmable CommandRunner.

    Each call consumes the next outcome; the last one repeats once the list runs out.
    An outcome may be a CompletedCommand, raw stdout (bytes/str), an exception to raise,
    or a callable receiving the argv and returning any of those.
    """

    def __init__(self, outcomes: Sequence[Outcome] | None = None):
        self._outcomes: list[Outcome] = list(outcomes or [])
        self.calls: list[tuple[str, ...]] = []

    def add(self, outcome: Outcome) -> None:
        self._outcomes.append(outcome)

    def run(self, argv: Sequence[str], *, max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES) -> CompletedCommand:
        args = tuple(str(arg) for arg in argv)
        self.calls.append(args)
        if not self._outcomes:
            raise CurlExecutionError("No stubbed output configured")

        outcome = self._outcomes[min(len(self.calls) - 1, len(self._outcomes) - 1)]
        if callable(outcome) and not isinstance(outcome, BaseException):
            outcome = outcome(args)
        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, CompletedCommand):
            result = outcome
        else:
            stdout = outcome.encode("utf-8") if isinstance(outcome, str) else bytes(outcome)
            result = CompletedCommand(argv=args, returncode=0, stdout=stdout)

        if len(result.stdout) > max_output_bytes:
            raise CurlExecutionError(
                f"stdout exceeded the {max_output_bytes} byte buffer limit",
                category=ErrorCategory.OUTPUT_LIMIT,
            )
        return result


__all__ = ["Outcome", "StubRunner", "make_output", "output_path"]
