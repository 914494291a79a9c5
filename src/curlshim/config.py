# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for curlshim."""

import os
from dataclasses import dataclass

DEFAULT_USER_AGENT = "Mozilla/4.0 (compatible; MSIE 6.0; Windows NT 5.1; SV1)"
DEFAULT_ACCEPT = "*/*"
DEFAULT_MAX_OUTPUT_BYTES = 10 * 1024 * 1024
DEFAULT_INLINE_BODY_LIMIT = 1000


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_str_env(name: str, default: str | None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value or None


@dataclass
class CurlSettings:
    """Dispatcher defaults."""

    curl_path: str = "curl"
    timeout: float = 10.0
    max_retries: int = 3
    initial_delay: float = 1.0
    backoff_factor: float = 2.0
    response_type: str = "json"
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES
    inline_body_limit: int = DEFAULT_INLINE_BODY_LIMIT
    temp_dir: str | None = None

    @classmethod
    def from_env(cls) -> "CurlSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_output_bytes = _int_env("CURLSHIM_MAX_OUTPUT_BYTES", cls.max_output_bytes)
        if max_output_bytes <= 0:
            max_output_bytes = cls.max_output_bytes
        max_retries = _int_env("CURLSHIM_MAX_RETRIES", cls.max_retries)
        if max_retries < 0:
            max_retries = cls.max_retries
        return cls(
            curl_path=os.getenv("CURLSHIM_CURL_PATH", cls.curl_path),
            timeout=_float_env("CURLSHIM_TIMEOUT", cls.timeout),
            max_retries=max_retries,
            initial_delay=_float_env("CURLSHIM_INITIAL_DELAY", cls.initial_delay),
            backoff_factor=_float_env("CURLSHIM_BACKOFF", cls.backoff_factor),
            response_type=os.getenv("CURLSHIM_RESPONSE_TYPE", cls.response_type).strip().lower(),
            user_agent=os.getenv("CURLSHIM_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("CURLSHIM_VERIFY_SSL", cls.verify_ssl),
            max_output_bytes=max_output_bytes,
            inline_body_limit=_int_env("CURLSHIM_INLINE_BODY_LIMIT", cls.inline_body_limit),
            temp_dir=_optional_str_env("CURLSHIM_TEMP_DIR", cls.temp_dir),
        )

    def default_headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": DEFAULT_ACCEPT}


def load_settings() -> CurlSettings:
    """Load dispatcher settings from environment with sensible defaults."""
    return CurlSettings.from_env()
