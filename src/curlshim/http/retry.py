# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry helper for CommandRunner implementations."""

from __future__ import annotations

import logging
import time

from ..config import DEFAULT_MAX_OUTPUT_BYTES, load_settings
from ..errors import CurlExecutionError, CurlRetryError
from .command import CurlCommand
from .models import RequestMetadata, RetryConfig
from .runner import CommandRunner, CompletedCommand

logger = logging.getLogger(__name__)


def build_default_retry_config() -> RetryConfig:
    """Create a RetryConfig from environment-backed CurlSettings."""
    return RetryConfig.from_settings(load_settings())


def run_with_retries(
    runner: CommandRunner,
    command: CurlCommand,
    metadata: RequestMetadata,
    *,
    retry_config: RetryConfig | None = None,
    max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES,
) -> CompletedCommand:
    """
    Run ``command`` up to ``max_retries + 1`` times, sleeping with exponential backoff
    between attempts.

    ``metadata.retries`` is incremented once per retry, after its backoff sleep. When the
    final attempt fails a :class:`CurlRetryError` wrapping the last failure is raised.
    """
    cfg = retry_config or build_default_retry_config()

    for attempt in range(cfg.max_retries + 1):
        if attempt:
            time.sleep(cfg.delay_for(attempt))
            metadata.retries += 1
        try:
            result = runner.run(command.argv, max_output_bytes=max_output_bytes)
        except (CurlExecutionError, OSError) as exc:
            if attempt >= cfg.max_retries:
                raise CurlRetryError(cfg.max_retries, exc) from exc
            logger.warning(
                "curl attempt %d/%d failed, retrying in %.1fs: %s",
                attempt + 1,
                cfg.max_retries + 1,
                cfg.delay_for(attempt + 1),
                exc,
            )
            continue
        logger.debug("curl attempt %d succeeded", attempt + 1)
        return result

    raise AssertionError("unreachable")  # pragma: no cover


__all__ = ["build_default_retry_config", "run_with_retries"]
