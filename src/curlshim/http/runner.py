# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Process invocation abstraction and the default subprocess-backed runner."""

from __future__ import annotations

import subprocess
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from ..config import DEFAULT_MAX_OUTPUT_BYTES
from ..errors import CurlExecutionError, ErrorCategory

_READ_CHUNK_BYTES = 64 * 1024


@dataclass(frozen=True)
class CompletedCommand:
    """Captured result of a successful invocation."""

    argv: tuple[str, ...]
    returncode: int
    stdout: bytes
    stderr: str = ""


class CommandRunner(Protocol):
    """
    Minimal protocol for running a command and capturing its output.

    Implementations raise :class:`CurlExecutionError` for spawn failures, non-zero exit
    codes and stdout larger than ``max_output_bytes``.
    """

    def run(self, argv: Sequence[str], *, max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES) -> CompletedCommand: ...


class SubprocessRunner(CommandRunner):
    """Runs commands with :mod:`subprocess`, without a shell."""

    def run(self, argv: Sequence[str], *, max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES) -> CompletedCommand:
        args = tuple(str(arg) for arg in argv)
        with tempfile.TemporaryFile() as stderr_file:
            try:
                proc = subprocess.Popen(args, stdout=subprocess.PIPE, stderr=stderr_file)
            except OSError as exc:
                raise CurlExecutionError(
                    f"failed to start {args[0] if args else 'command'}: {exc}",
                    category=ErrorCategory.SPAWN_ERROR,
                ) from exc

            with proc:
                stdout = bytearray()
                assert proc.stdout is not None
                while True:
                    chunk = proc.stdout.read(_READ_CHUNK_BYTES)
                    if not chunk:
                        break
                    stdout.extend(chunk)
                    if len(stdout) > max_output_bytes:
                        proc.kill()
                        proc.wait()
                        raise CurlExecutionError(
                            f"stdout exceeded the {max_output_bytes} byte buffer limit",
                            category=ErrorCategory.OUTPUT_LIMIT,
                        )
                returncode = proc.wait()

            stderr_file.seek(0)
            stderr = stderr_file.read().decode("utf-8", errors="replace").strip()

        if returncode != 0:
            detail = f": {stderr}" if stderr else ""
            raise CurlExecutionError(
                f"command exited with status {returncode}{detail}",
                returncode=returncode,
                stderr=stderr,
            )
        return CompletedCommand(argv=args, returncode=returncode, stdout=bytes(stdout), stderr=stderr)


def create_default_runner() -> CommandRunner:
    """Factory for the default subprocess-backed runner."""
    return SubprocessRunner()


__all__ = ["CommandRunner", "CompletedCommand", "SubprocessRunner", "create_default_runner"]
