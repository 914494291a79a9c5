# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request dispatcher: the public client API backed by the curl binary."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .config import CurlSettings, load_settings
from .http.command import build_command
from .http.context import CallContext
from .http.models import RequestConfig, Response
from .http.options import build_default_config, normalize_options
from .http.parsing import parse_output
from .http.retry import run_with_retries
from .http.runner import CommandRunner, create_default_runner
from .http.stream import ResponseStream

logger = logging.getLogger(__name__)


class CurlDispatcher:
    """
    Client with a request/get/post/put/patch/delete API that shells out to curl.

    The instance only holds immutable defaults and its collaborators; every call gets a
    fresh :class:`CallContext`, so one instance can serve concurrent calls.
    """

    def __init__(
        self,
        defaults: Mapping[str, Any] | None = None,
        *,
        runner: CommandRunner | None = None,
        settings: CurlSettings | None = None,
    ):
        self.settings = settings or load_settings()
        self.runner = runner or create_default_runner()
        self.defaults: RequestConfig = build_default_config(self.settings, defaults)

    @classmethod
    def create(
        cls,
        defaults: Mapping[str, Any] | None = None,
        *,
        runner: CommandRunner | None = None,
        settings: CurlSettings | None = None,
    ) -> CurlDispatcher:
        return cls(defaults, runner=runner, settings=settings)

    def request(self, options: Mapping[str, Any] | None = None, **kwargs: Any) -> Response:
        """
        Issue one request.

        Options may be passed as a mapping, as keyword arguments, or both (keywords win).
        Raises :class:`~curlshim.errors.CurlRetryError` once every attempt has failed.
        Temporary files are removed before returning or raising; a streamed response
        keeps its output file until the stream is drained or closed.
        """
        context = CallContext.open(self.defaults, normalize_options(options, **kwargs), self.settings)
        config = context.config
        logger.debug("%s %s", config.method.upper(), context.metadata.final_url)

        with context.temp_files:
            command = build_command(config, context.metadata, context.temp_files, self.settings)
            result = run_with_retries(
                self.runner,
                command,
                context.metadata,
                retry_config=context.retry_config,
                max_output_bytes=self.settings.max_output_bytes,
            )
            data = parse_output(result.stdout, config.response_type, context.metadata)
            if isinstance(data, ResponseStream):
                context.temp_files.release(data.path)
            return Response(data=data, config=config, metadata=context.metadata)

    def _call(
        self,
        method: str,
        url: str,
        config: Mapping[str, Any] | None,
        kwargs: dict[str, Any],
        data: Any = None,
    ) -> Response:
        fixed: dict[str, Any] = {"method": method, "url": url}
        if data is not None:
            fixed["data"] = data
        return self.request(config, **{**kwargs, **fixed})

    def get(self, url: str, config: Mapping[str, Any] | None = None, **kwargs: Any) -> Response:
        return self._call("get", url, config, kwargs)

    def post(self, url: str, data: Any = None, config: Mapping[str, Any] | None = None, **kwargs: Any) -> Response:
        return self._call("post", url, config, kwargs, data)

    def put(self, url: str, data: Any = None, config: Mapping[str, Any] | None = None, **kwargs: Any) -> Response:
        return self._call("put", url, config, kwargs, data)

    def patch(self, url: str, data: Any = None, config: Mapping[str, Any] | None = None, **kwargs: Any) -> Response:
        return self._call("patch", url, config, kwargs, data)

    def delete(self, url: str, config: Mapping[str, Any] | None = None, **kwargs: Any) -> Response:
        return self._call("delete", url, config, kwargs)


__all__ = ["CurlDispatcher"]
