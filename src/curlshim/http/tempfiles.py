# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-call registry of temporary files."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterator

logger = logging.getLogger(__name__)


class TempFileSet:
    """
    Temporary files owned by one in-flight call.

    Every registered path is removed by :meth:`cleanup`. Removal is best-effort: failures
    are logged and the remaining paths are still processed. A path handed to another
    owner with :meth:`release` is no longer touched.
    """

    def __init__(self, directory: str | None = None):
        self.directory = directory
        self._paths: dict[str, None] = {}

    def create(self, prefix: str, payload: str | bytes | None = None) -> str:
        """Create a uniquely named file, optionally write ``payload`` to it, and register it."""
        fd, path = tempfile.mkstemp(prefix=f"{prefix}-", dir=self.directory)
        self.add(path)
        with os.fdopen(fd, "wb") as handle:
            if payload is not None:
                handle.write(payload.encode("utf-8") if isinstance(payload, str) else bytes(payload))
        return path

    def add(self, path: str) -> None:
        self._paths[path] = None

    def release(self, path: str) -> bool:
        """Stop tracking ``path`` without deleting it. Returns whether it was tracked."""
        return self._paths.pop(path, False) is None

    def cleanup(self) -> None:
        paths = list(self._paths)
        self._paths.clear()
        for path in paths:
            try:
                os.remove(path)
            except OSError as exc:
                logger.warning("Failed to clean up temporary file %s: %s", path, exc)

    @property
    def paths(self) -> list[str]:
        return list(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __enter__(self) -> TempFileSet:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.cleanup()


__all__ = ["TempFileSet"]
