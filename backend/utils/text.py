"""
Text helpers for upload headers and policy strings.
"""
import re
from pathlib import PurePosixPath, PureWindowsPath
from typing import List, Optional

_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]*)\s*$")
_SIZE_UNITS = {
    "": 1,
    "b": 1,
    "k": 1024,
    "kb": 1024,
    "m": 1024 ** 2,
    "mb": 1024 ** 2,
    "g": 1024 ** 3,
    "gb": 1024 ** 3,
}
_JPEG_SUFFIX_RE = re.compile(r"\.jpe?g$", re.IGNORECASE)


def parse_size(value) -> Optional[int]:
    """
    Parse a human size into bytes.

    Accepts plain integers and values with k/kb, m/mb, g/gb suffixes
    (1024-based, case-insensitive), e.g. "32M", "1.5 gb", "4096".

    Args:
        value: int or string to parse

    Returns:
        Size in bytes, or None when value is empty or the unit is unknown
    """
    if value is None or value == "":
        return None
    if isinstance(value, int):
        return value
    match = _SIZE_RE.match(str(value))
    if not match:
        return None
    number, unit = match.groups()
    factor = _SIZE_UNITS.get(unit.lower())
    if factor is None:
        return None
    return int(float(number) * factor)


def split_extensions(extensions: str) -> List[str]:
    """Split a space-separated extension list into lower-cased tokens without dots."""
    return [token.lower().lstrip(".") for token in extensions.split() if token.strip(".")]


def normalize_extension(filename: str) -> str:
    """Rewrite a trailing .jpeg/.JPG/.JPEG (any case) to .jpg."""
    return _JPEG_SUFFIX_RE.sub(".jpg", filename)


def base_name(filename: str) -> str:
    """Drop any directory components a client put into the file name."""
    name = PureWindowsPath(filename).name
    return PurePosixPath(name).name


def file_extension(filename: str) -> str:
    """Extension with leading dot, as typed by the client ("" when none)."""
    return PurePosixPath(filename).suffix
