# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
import logging
import time

import pytest

from curlshim.cli import main as cli_main
from curlshim.cli.main import build_parser, main, parse_header_args
from curlshim.errors import CurlExecutionError
from curlshim.http.adapters import StubRunner, make_output, output_path
from curlshim.log import setup_logging


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    monkeypatch.setenv("CURLSHIM_TEMP_DIR", str(tmp_path))
    monkeypatch.setattr(time, "sleep", lambda _: None)


def _use_runner(monkeypatch, runner):
    monkeypatch.setattr(cli_main, "create_default_runner", lambda: runner)
    return runner


def test_build_parser():
    args = build_parser().parse_args(["http://example.com", "-X", "put", "-H", "A: 1", "-H", "B: 2", "--json"])
    assert args.url == "http://example.com"
    assert args.method == "put"
    assert args.headers == ["A: 1", "B: 2"]
    assert args.json is True
    assert args.response_type is None


def test_parse_header_args():
    assert parse_header_args(["X-A: 1", "Authorization: Bearer a:b"]) == {"X-A": "1", "Authorization": "Bearer a:b"}
    with pytest.raises(ValueError):
        parse_header_args(["no-colon"])


def test_dry_run_prints_command(capsys, tmp_path):
    code = main(["https://example.com/x", "--dry-run", "-X", "post", "-d", "hello", "-H", "X-A: 1", "--timeout", "4"])
    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("curl ")
    assert "-X POST" in out
    assert "'X-A: 1'" in out
    assert "--data-raw hello" in out
    assert "--max-time 4" in out
    assert out.strip().endswith("https://example.com/x")
    assert list(tmp_path.iterdir()) == []


def test_main_prints_json_data(monkeypatch, capsys):
    runner = _use_runner(monkeypatch, StubRunner([make_output('{"a": 1}')]))
    assert main(["https://example.com"]) == 0
    assert json.loads(capsys.readouterr().out) == {"a": 1}
    assert runner.calls[0][-1] == "https://example.com"


def test_main_json_flag_includes_metadata(monkeypatch, capsys):
    _use_runner(monkeypatch, StubRunner([make_output("hello", redirects=1, url="https://example.com/final")]))
    assert main(["https://example.com", "--response-type", "text", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["data"] == "hello"
    assert payload["status"] == 200
    assert payload["metadata"]["redirects"] == 1
    assert payload["metadata"]["final_url"] == "https://example.com/final"


def test_main_streams_to_stdout(monkeypatch, capsysbinary):
    def outcome(argv):
        with open(output_path(argv), "wb") as handle:
            handle.write(b"\x00binary\xff")
        return make_output("")

    _use_runner(monkeypatch, StubRunner([outcome]))
    assert main(["https://example.com/file", "--response-type", "stream"]) == 0
    assert capsysbinary.readouterr().out == b"\x00binary\xff"


def test_main_reports_failure(monkeypatch, capsys):
    _use_runner(monkeypatch, StubRunner([CurlExecutionError("command exited with status 6")]))
    assert main(["https://nope.invalid", "--retries", "0"]) == 1
    err = capsys.readouterr().err
    assert "failed after 0 retries" in err
    assert "status 6" in err


def test_ignore_ssl_errors_adds_insecure(monkeypatch):
    runner = _use_runner(monkeypatch, StubRunner([make_output("")]))
    main(["https://self-signed.example", "--ignore-ssl-errors"])
    assert "--insecure" in runner.calls[0]


def test_setup_logging_levels(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs["level"]))
    setup_logging(verbose=True)
    setup_logging("info")
    setup_logging("nonsense")
    assert calls == [logging.DEBUG, logging.INFO, logging.WARNING]


def test_help_describes_trailer_limitation():
    help_text = " ".join(build_parser().format_help().split())
    assert "Known limitation" in help_text
    assert "--response-type stream" in help_text
