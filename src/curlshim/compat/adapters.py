# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Module-level entry points mirroring the static API of the replaced client.

All helpers share one lazily created :class:`CurlDispatcher` built from environment
settings. Use :func:`create` for an instance with its own defaults.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any

from ..config import CurlSettings
from ..dispatcher import CurlDispatcher
from ..http.models import Response
from ..http.options import normalize_options
from ..http.runner import CommandRunner

_default_dispatcher: CurlDispatcher | None = None
_default_lock = threading.Lock()


def get_default_dispatcher() -> CurlDispatcher:
    global _default_dispatcher
    with _default_lock:
        if _default_dispatcher is None:
            _default_dispatcher = CurlDispatcher()
        return _default_dispatcher


def set_default_dispatcher(dispatcher: CurlDispatcher | None) -> None:
    """Replace (or with ``None``, reset) the shared dispatcher."""
    global _default_dispatcher
    with _default_lock:
        _default_dispatcher = dispatcher


def create(
    defaults: Mapping[str, Any] | None = None,
    *,
    runner: CommandRunner | None = None,
    settings: CurlSettings | None = None,
    **options: Any,
) -> CurlDispatcher:
    """New dispatcher whose defaults are ``defaults`` plus any keyword options."""
    return CurlDispatcher.create(normalize_options(defaults, **options), runner=runner, settings=settings)


def request(options: Mapping[str, Any] | None = None, **kwargs: Any) -> Response:
    return get_default_dispatcher().request(options, **kwargs)


def get(url: str, config: Mapping[str, Any] | None = None, **kwargs: Any) -> Response:
    return get_default_dispatcher().get(url, config, **kwargs)


def post(url: str, data: Any = None, config: Mapping[str, Any] | None = None, **kwargs: Any) -> Response:
    return get_default_dispatcher().post(url, data, config, **kwargs)


def put(url: str, data: Any = None, config: Mapping[str, Any] | None = None, **kwargs: Any) -> Response:
    return get_default_dispatcher().put(url, data, config, **kwargs)


def patch(url: str, data: Any = None, config: Mapping[str, Any] | None = None, **kwargs: Any) -> Response:
    return get_default_dispatcher().patch(url, data, config, **kwargs)


def delete(url: str, config: Mapping[str, Any] | None = None, **kwargs: Any) -> Response:
    return get_default_dispatcher().delete(url, config, **kwargs)


__all__ = [
    "create",
    "delete",
    "get",
    "get_default_dispatcher",
    "patch",
    "post",
    "put",
    "request",
    "set_default_dispatcher",
]
