# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Lazy byte stream over curl's output file for ``response_type="stream"``."""

from __future__ import annotations

import logging
import weakref
from collections.abc import Iterator
from typing import BinaryIO

from .tempfiles import TempFileSet

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


def _release(handle: BinaryIO | None, files: TempFileSet) -> None:
    if handle is not None:
        try:
            handle.close()
        except OSError as exc:
            logger.warning("Failed to close streamed response handle: %s", exc)
    files.cleanup()


class ResponseStream:
    """
    Sequential reader over a file written by curl.

    The stream owns the file: it is deleted once the stream is drained, closed, or
    garbage collected, whichever happens first. Open and read failures are logged and
    end the stream rather than raising.
    """

    def __init__(self, path: str, *, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.path = path
        self.chunk_size = chunk_size
        self._files = TempFileSet()
        self._files.add(path)
        self._handle: BinaryIO | None = None
        try:
            self._handle = open(path, "rb")  # noqa: SIM115
        except OSError as exc:
            logger.error("Failed to open streamed response %s: %s", path, exc)
        self._finalizer = weakref.finalize(self, _release, self._handle, self._files)

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (all remaining when negative); ``b""`` at the end."""
        if size == 0 and not self.closed:
            return b""
        if self.closed or self._handle is None:
            self.close()
            return b""
        try:
            data = self._handle.read(size)
        except OSError as exc:
            logger.error("Failed to read streamed response %s: %s", self.path, exc)
            self.close()
            return b""
        if not data or size is None or size < 0:
            self.close()
        return data

    def iter_bytes(self, chunk_size: int | None = None) -> Iterator[bytes]:
        size = chunk_size or self.chunk_size
        while True:
            chunk = self.read(size)
            if not chunk:
                return
            yield chunk

    def __iter__(self) -> Iterator[bytes]:
        return self.iter_bytes()

    def close(self) -> None:
        """Close the handle and delete the file. Safe to call more than once."""
        self._finalizer()

    def __enter__(self) -> ResponseStream:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<ResponseStream {self.path} ({state})>"


__all__ = ["DEFAULT_CHUNK_SIZE", "ResponseStream"]
