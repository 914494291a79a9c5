# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import os

from curlshim.http.tempfiles import TempFileSet


def test_create_writes_payload_and_cleanup_removes(tmp_path):
    files = TempFileSet(str(tmp_path))
    text_path = files.create("data", "hello")
    bin_path = files.create("upload", b"\x00\x01")
    empty_path = files.create("response")

    with open(text_path, encoding="utf-8") as handle:
        assert handle.read() == "hello"
    with open(bin_path, "rb") as handle:
        assert handle.read() == b"\x00\x01"
    assert os.path.getsize(empty_path) == 0
    assert len(files) == 3
    assert text_path != bin_path

    files.cleanup()
    assert len(files) == 0
    assert list(tmp_path.iterdir()) == []


def test_cleanup_is_idempotent(tmp_path):
    files = TempFileSet(str(tmp_path))
    files.cleanup()
    files.create("data", "x")
    files.cleanup()
    files.cleanup()
    assert len(files) == 0


def test_failed_deletion_is_logged_and_does_not_block_others(tmp_path, caplog):
    files = TempFileSet(str(tmp_path))
    missing = str(tmp_path / "already-gone")
    files.add(missing)
    real = files.create("data", "x")

    with caplog.at_level(logging.WARNING, logger="curlshim.http.tempfiles"):
        files.cleanup()

    assert not os.path.exists(real)
    assert any("already-gone" in record.getMessage() for record in caplog.records)
    assert len(files) == 0


def test_release_hands_off_ownership(tmp_path):
    files = TempFileSet(str(tmp_path))
    path = files.create("response")
    assert files.release(path) is True
    assert files.release(path) is False
    files.cleanup()
    assert os.path.exists(path)


def test_context_manager_cleans_up(tmp_path):
    with TempFileSet(str(tmp_path)) as files:
        path = files.create("data", "x")
        assert os.path.exists(path)
    assert not os.path.exists(path)
