"""
Slice descriptor parsing.

Every slice request carries its position in X-* headers:

    X-id          upload id (optional, "null" from browsers means empty)
    X-Unique      key used for the partial file name (optional)
    X-File-Name   original client-side file name
    X-Slice       1-based index of this slice
    X-Slices      total slice count
    X-File-Size   declared size of the whole file
    X-Slice-Size  declared size of this slice
    X-Parameter   opaque value echoed back on completion
"""
from typing import Mapping, Optional

from config import PARTIAL_PREFIX, PARTIAL_SEPARATOR
from models.upload import UploadSlice
from services.errors import DescriptorError
from utils.text import base_name, normalize_extension

HEADER_ID = "X-id"
HEADER_UNIQUE = "X-Unique"
HEADER_FILE_NAME = "X-File-Name"
HEADER_SLICE = "X-Slice"
HEADER_SLICES = "X-Slices"
HEADER_FILE_SIZE = "X-File-Size"
HEADER_SLICE_SIZE = "X-Slice-Size"
HEADER_PARAMETER = "X-Parameter"


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is None:
        # plain dicts are case-sensitive, HTTP headers are not
        lowered = name.lower()
        for key, candidate in headers.items():
            if key.lower() == lowered:
                return candidate
    return value


def _int_header(headers: Mapping[str, str], name: str) -> int:
    raw = _header(headers, name)
    if raw is None or not raw.strip():
        raise DescriptorError(f"can't get file data from the header: {name} is missing")
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise DescriptorError(f"can't get file data from the header: {name} is not a number") from exc
    if value < 0:
        raise DescriptorError(f"can't get file data from the header: {name} is negative")
    return value


def working_name(key: str, file_name: str) -> str:
    """Partial file name for one logical upload."""
    return f"{PARTIAL_PREFIX}{key}{PARTIAL_SEPARATOR}{file_name}"


def parse_slice(headers: Mapping[str, str], normalize: bool = False) -> UploadSlice:
    """Build an UploadSlice from request headers or raise DescriptorError."""
    slice_index = _int_header(headers, HEADER_SLICE)
    total_slices = _int_header(headers, HEADER_SLICES)
    total_size = _int_header(headers, HEADER_FILE_SIZE)
    slice_size = _int_header(headers, HEADER_SLICE_SIZE)

    file_name = base_name((_header(headers, HEADER_FILE_NAME) or "").strip())
    if not file_name or file_name in {".", ".."}:
        raise DescriptorError(f"can't get file data from the header: {HEADER_FILE_NAME} is missing")
    if normalize:
        file_name = normalize_extension(file_name)

    upload_id = (_header(headers, HEADER_ID) or "").strip()
    if upload_id == "null":
        upload_id = ""
    unique = base_name((_header(headers, HEADER_UNIQUE) or "").strip())

    return UploadSlice(
        upload_id=upload_id,
        original_file_name=file_name,
        working_name=working_name(unique or base_name(upload_id), file_name),
        slice_index=slice_index,
        total_slices=total_slices,
        declared_total_size=total_size,
        declared_slice_size=slice_size,
        group_parameter=_header(headers, HEADER_PARAMETER) or "",
    )
