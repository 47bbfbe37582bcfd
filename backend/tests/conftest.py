"""Pytest configuration and fixtures for the upload backend tests."""

import logging
import os
import tempfile

# keep log files out of the repository while config is imported
os.environ.setdefault("UPLOAD_LOG_DIR", tempfile.mkdtemp(prefix="upload-logs-"))

import pytest

from models.upload import UploadConfiguration


@pytest.fixture
def logger():
    """Plain logger without file handlers."""
    return logging.getLogger("upload_tests")


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "static" / "images"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def make_config(tmp_path, upload_dir):
    """Factory for upload policies rooted in a temporary static directory."""

    def _make(**overrides):
        values = {
            "path": str(upload_dir),
            "extensions": "gif jpg png webp",
            "max_size": 1024 * 1024,
            "public_root": str(tmp_path),
        }
        values.update(overrides)
        return UploadConfiguration(**values)

    return _make


@pytest.fixture
def slice_headers():
    """Factory for X-* slice headers."""

    def _make(name="photo.jpg", index=1, total=1, size=10, slice_size=None, **extra):
        headers = {
            "X-id": "upload-1",
            "X-Unique": "u1",
            "X-File-Name": name,
            "X-Slice": str(index),
            "X-Slices": str(total),
            "X-File-Size": str(size),
            "X-Slice-Size": str(slice_size if slice_size is not None else size),
            "X-Parameter": "gallery",
        }
        headers.update(extra)
        return headers

    return _make
