# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-call context threaded through command building, execution and parsing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..config import CurlSettings
from .models import RequestConfig, RequestMetadata, RetryConfig
from .options import merge_config, resolve_url
from .tempfiles import TempFileSet


@dataclass
class CallContext:
    """Everything one request owns. Never shared between calls."""

    config: RequestConfig
    metadata: RequestMetadata
    temp_files: TempFileSet
    retry_config: RetryConfig

    @classmethod
    def open(cls, defaults: RequestConfig, options: Mapping[str, Any], settings: CurlSettings) -> CallContext:
        metadata = RequestMetadata()
        config = merge_config(defaults, options)
        metadata.final_url = resolve_url(config)
        return cls(
            config=config,
            metadata=metadata,
            temp_files=TempFileSet(settings.temp_dir),
            retry_config=RetryConfig.from_settings(settings, max_retries=config.max_retries),
        )


__all__ = ["CallContext"]
