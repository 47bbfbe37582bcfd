"""Tests for filesystem helpers."""

import io
import os
import stat
import time

import pytest

from services.errors import StorageError
from utils.fs import (
    copy_in_chunks,
    ensure_directory,
    ensure_writable,
    list_stale_files,
    open_for_append,
    remove_file,
    replace_file,
)


def test_ensure_directory_is_idempotent(tmp_path):
    target = tmp_path / "a" / "b"
    ensure_directory(target)
    ensure_directory(target)
    assert target.is_dir()
    assert [p.name for p in (tmp_path / "a").iterdir()] == ["b"]


def test_ensure_directory_rejects_file(tmp_path):
    target = tmp_path / "occupied"
    target.write_text("x")
    with pytest.raises(StorageError):
        ensure_directory(target)


def test_ensure_writable_adds_owner_write_bit(tmp_path):
    target = tmp_path / "ro"
    target.mkdir()
    target.chmod(0o555)
    try:
        ensure_writable(target)
        assert target.stat().st_mode & stat.S_IWUSR
    finally:
        target.chmod(0o755)


def test_ensure_writable_missing_directory(tmp_path):
    with pytest.raises(StorageError):
        ensure_writable(tmp_path / "missing")


def test_copy_in_chunks_copies_everything():
    data = os.urandom(10_000)
    target = io.BytesIO()
    assert copy_in_chunks(io.BytesIO(data), target, 4096) == len(data)
    assert target.getvalue() == data


def test_copy_in_chunks_counts_only_appended_bytes(tmp_path):
    target = tmp_path / "partial"
    target.write_bytes(b"first")
    with open_for_append(target) as f:
        assert copy_in_chunks(io.BytesIO(b"second"), f, 4) == 6
    assert target.read_bytes() == b"firstsecond"


def test_replace_file_overwrites(tmp_path):
    src = tmp_path / "src"
    dst = tmp_path / "dst"
    src.write_bytes(b"new")
    dst.write_bytes(b"old")
    replace_file(src, dst)
    assert dst.read_bytes() == b"new"
    assert not src.exists()


def test_replace_missing_source_is_storage_error(tmp_path):
    with pytest.raises(StorageError):
        replace_file(tmp_path / "nope", tmp_path / "dst")


def test_remove_file(tmp_path):
    target = tmp_path / "f"
    target.write_bytes(b"x")
    assert remove_file(target) is True
    assert remove_file(target) is False


def test_list_stale_files_filters_by_prefix_and_age(tmp_path):
    old = tmp_path / "__old·a.jpg"
    fresh = tmp_path / "__fresh·b.jpg"
    final = tmp_path / "c.jpg"
    for p in (old, fresh, final):
        p.write_bytes(b"x")
    past = time.time() - 3600
    os.utime(old, (past, past))
    os.utime(final, (past, past))

    assert list_stale_files(tmp_path, "__", 60) == [old]
    assert list_stale_files(tmp_path / "missing", "__", 60) == []
