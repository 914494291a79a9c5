# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

import curlshim
from curlshim.compat import adapters
from curlshim.config import CurlSettings
from curlshim.dispatcher import CurlDispatcher
from curlshim.http.adapters import StubRunner, make_output
from curlshim.http.runner import SubprocessRunner


@pytest.fixture
def stub(tmp_path):
    runner = StubRunner([make_output('{"ok": true}')])
    adapters.set_default_dispatcher(CurlDispatcher(runner=runner, settings=CurlSettings(temp_dir=str(tmp_path))))
    yield runner
    adapters.set_default_dispatcher(None)


def test_module_level_helpers_use_default_dispatcher(stub):
    assert curlshim.get("https://x").data == {"ok": True}
    curlshim.post("https://x", {"a": 1})
    curlshim.put("https://x", "b")
    curlshim.patch("https://x")
    curlshim.delete("https://x")
    curlshim.request(url="https://x", method="head")
    methods = [argv[list(argv).index("-X") + 1] for argv in stub.calls]
    assert methods == ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


def test_default_dispatcher_is_created_lazily():
    adapters.set_default_dispatcher(None)
    try:
        first = adapters.get_default_dispatcher()
        assert first is adapters.get_default_dispatcher()
        assert isinstance(first.runner, SubprocessRunner)
    finally:
        adapters.set_default_dispatcher(None)


def test_create_returns_configured_instance():
    runner = StubRunner([make_output("")])
    dispatcher = curlshim.create({"headers": {"X-App": "demo"}, "maxRetries": 1}, runner=runner)
    assert isinstance(dispatcher, CurlDispatcher)
    assert dispatcher.defaults.headers["X-App"] == "demo"
    assert dispatcher.defaults.max_retries == 1
    assert adapters.create(timeout=1.0, runner=runner).defaults.timeout == 1.0
