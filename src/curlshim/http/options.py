# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Option normalization and config merging."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, replace
from typing import Any

import httpx

from ..config import CurlSettings
from .headers import merge_headers
from .models import RequestConfig, ResponseType

# camelCase names accepted for callers porting code from the replaced client.
OPTION_ALIASES = {
    "responseType": "response_type",
    "maxRetries": "max_retries",
    "baseURL": "base_url",
    "baseUrl": "base_url",
    "verifySsl": "verify_ssl",
}

_CONFIG_FIELDS = frozenset(f.name for f in fields(RequestConfig)) - {"extra"}


def normalize_options(options: Mapping[str, Any] | None = None, **kwargs: Any) -> dict[str, Any]:
    """Flatten a mapping plus keyword options into snake_case keys; kwargs win."""
    combined: dict[str, Any] = {}
    for source in (options or {}, kwargs):
        for key, value in source.items():
            combined[OPTION_ALIASES.get(key, key)] = value
    return combined


def merge_config(defaults: RequestConfig, options: Mapping[str, Any]) -> RequestConfig:
    """
    Shallow-merge per-call options over ``defaults``.

    Headers merge key-wise with per-call values winning; every other option given
    (not None) replaces the default outright. Unknown keys land in ``extra``.
    """
    options = normalize_options(options)
    updates: dict[str, Any] = {}
    extra = dict(defaults.extra)
    for key, value in options.items():
        if key == "headers":
            continue
        if key not in _CONFIG_FIELDS:
            extra[key] = value
            continue
        if value is None:
            continue
        if key == "response_type":
            value = ResponseType.coerce(value)
        updates[key] = value

    updates["headers"] = merge_headers(defaults.headers, options.get("headers"))
    updates["extra"] = extra
    return replace(defaults, **updates)


def build_default_config(settings: CurlSettings, overrides: Mapping[str, Any] | None = None) -> RequestConfig:
    """Instance defaults: settings-derived values with constructor overrides merged on top."""
    base = RequestConfig(
        headers=settings.default_headers(),
        response_type=ResponseType.coerce(settings.response_type),
        timeout=settings.timeout,
        max_retries=settings.max_retries,
        verify_ssl=settings.verify_ssl,
    )
    if not overrides:
        return base
    return merge_config(base, overrides)


def _is_absolute(url: str) -> bool:
    return "://" in url.split("?", 1)[0]


def resolve_url(config: RequestConfig) -> str:
    """Apply ``base_url`` and ``params``; without either the URL passes through verbatim."""
    url = "" if config.url is None else str(config.url)
    if config.base_url and not _is_absolute(url):
        url = f"{str(config.base_url).rstrip('/')}/{url.lstrip('/')}" if url else str(config.base_url)
    if config.params:
        params = dict(config.params) if isinstance(config.params, Mapping) else list(config.params)
        url = str(httpx.URL(url).copy_merge_params(params))
    return url


__all__ = [
    "OPTION_ALIASES",
    "build_default_config",
    "merge_config",
    "normalize_options",
    "resolve_url",
]
