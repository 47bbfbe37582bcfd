"""Tests for the upload policy checks."""

import pytest

from services.errors import PolicyError
from services.validation import check_file_extension, check_file_size, effective_extensions, validate_slice
from services.descriptor import parse_slice


def test_size_equal_to_limit_is_accepted():
    check_file_size(100, 100)


def test_size_over_limit_is_rejected():
    with pytest.raises(PolicyError) as exc:
        check_file_size(101, 100)
    assert exc.value.status == 500
    assert "100 bytes" in exc.value.message


def test_jpg_is_accepted_when_only_jpeg_configured():
    assert "jpg" in check_file_extension("a.jpg", "png jpeg")


def test_jpeg_is_accepted_when_only_jpg_configured():
    assert "jpeg" in check_file_extension("a.JPEG", "png JPG")


def test_no_sibling_added_when_neither_configured():
    assert effective_extensions("png gif") == ["png", "gif"]


def test_both_configured_are_not_duplicated():
    assert effective_extensions("jpg jpeg") == ["jpg", "jpeg"]


@pytest.mark.parametrize("name", ["a.bmp", "a", "a.png.exe", "jpg"])
def test_extension_not_in_allow_list_is_rejected(name):
    with pytest.raises(PolicyError) as exc:
        check_file_extension(name, "png jpg")
    assert "png jpg jpeg" in exc.value.message


def test_size_is_checked_before_extension(make_config, slice_headers):
    upload = parse_slice(slice_headers(name="a.bmp", size=10_000))
    with pytest.raises(PolicyError) as exc:
        validate_slice(upload, make_config(max_size=10))
    assert "size" in exc.value.message
