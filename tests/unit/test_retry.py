# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import time

import pytest

from curlshim.errors import CurlExecutionError, CurlRetryError
from curlshim.http.adapters import StubRunner, make_output
from curlshim.http.command import CurlCommand
from curlshim.http.models import RequestMetadata, RetryConfig
from curlshim.http.retry import build_default_retry_config, run_with_retries

COMMAND = CurlCommand(argv=("curl", "http://example"))


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []
    monkeypatch.setattr(time, "sleep", recorded.append)
    return recorded


def test_success_first_attempt(sleeps):
    runner = StubRunner([make_output("ok")])
    metadata = RequestMetadata()
    result = run_with_retries(runner, COMMAND, metadata, retry_config=RetryConfig(max_retries=3))
    assert result.stdout.endswith(b"ok")
    assert metadata.retries == 0
    assert sleeps == []
    assert runner.calls == [COMMAND.argv]


def test_succeeds_after_n_failures(sleeps):
    runner = StubRunner([CurlExecutionError("reset"), CurlExecutionError("reset"), make_output("ok")])
    metadata = RequestMetadata()
    result = run_with_retries(runner, COMMAND, metadata, retry_config=RetryConfig(max_retries=2))
    assert result.returncode == 0
    assert metadata.retries == 2
    assert sleeps == [2.0, 4.0]
    assert len(runner.calls) == 3


def test_always_failing_raises_after_exactly_n_retries(sleeps):
    runner = StubRunner([CurlExecutionError("command exited with status 7")])
    metadata = RequestMetadata()
    with pytest.raises(CurlRetryError) as excinfo:
        run_with_retries(runner, COMMAND, metadata, retry_config=RetryConfig(max_retries=3))
    err = excinfo.value
    assert err.retries == 3
    assert "failed after 3 retries" in str(err)
    assert "status 7" in str(err)
    assert isinstance(err.__cause__, CurlExecutionError)
    assert metadata.retries == 3
    assert len(runner.calls) == 4
    assert sleeps == [2.0, 4.0, 8.0]


def test_zero_retries_means_single_attempt(sleeps):
    runner = StubRunner([CurlExecutionError("boom"), make_output("ok")])
    with pytest.raises(CurlRetryError):
        run_with_retries(runner, COMMAND, RequestMetadata(), retry_config=RetryConfig(max_retries=0))
    assert len(runner.calls) == 1
    assert sleeps == []


def test_os_errors_are_retried(sleeps):
    runner = StubRunner([OSError("broken pipe"), make_output("ok")])
    metadata = RequestMetadata()
    run_with_retries(runner, COMMAND, metadata, retry_config=RetryConfig(max_retries=1))
    assert metadata.retries == 1


def test_unexpected_errors_propagate_without_retry(sleeps):
    runner = StubRunner([ValueError("bug"), make_output("ok")])
    with pytest.raises(ValueError):
        run_with_retries(runner, COMMAND, RequestMetadata(), retry_config=RetryConfig(max_retries=3))
    assert len(runner.calls) == 1


def test_output_ceiling_is_a_retryable_failure(sleeps):
    runner = StubRunner([b"x" * 50, make_output("ok")])
    metadata = RequestMetadata()
    run_with_retries(runner, COMMAND, metadata, retry_config=RetryConfig(max_retries=1), max_output_bytes=40)
    assert metadata.retries == 1


def test_custom_backoff(sleeps):
    runner = StubRunner([CurlExecutionError("x"), CurlExecutionError("x"), make_output("ok")])
    cfg = RetryConfig(max_retries=2, backoff_factor=3.0, initial_delay=0.5)
    run_with_retries(runner, COMMAND, RequestMetadata(), retry_config=cfg)
    assert sleeps == [1.5, 4.5]


def test_build_default_retry_config_reads_env(monkeypatch):
    monkeypatch.setenv("CURLSHIM_MAX_RETRIES", "5")
    assert build_default_retry_config().max_retries == 5
