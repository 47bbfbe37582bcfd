"""
Upload policy checks: declared size first, extension second.
"""
from typing import List

from models.upload import UploadConfiguration, UploadSlice
from services.errors import PolicyError
from utils.text import file_extension, split_extensions

JPEG_SIBLINGS = ("jpg", "jpeg")


def effective_extensions(extensions: str) -> List[str]:
    """
    Allowed extensions with the jpg/jpeg sibling added when only one is configured.
    """
    allowed = split_extensions(extensions)
    has_jpg = "jpg" in allowed
    has_jpeg = "jpeg" in allowed
    if has_jpeg and not has_jpg:
        allowed.append("jpg")
    elif has_jpg and not has_jpeg:
        allowed.append("jpeg")
    return allowed


def check_file_size(declared_size: int, max_size: int) -> None:
    if declared_size > max_size:
        raise PolicyError(f"file size exceeds the allowed limit of {max_size} bytes")


def check_file_extension(file_name: str, extensions: str) -> List[str]:
    """Return the effective allow-list, or raise PolicyError when the extension is not in it."""
    allowed = effective_extensions(extensions)
    ext = file_extension(file_name).lower()
    if ext and ext[1:] in allowed:
        return allowed
    raise PolicyError(
        "Invalid file extension.\n Only the following extensions are allowed:\n "
        + " ".join(allowed)
    )


def validate_slice(upload: UploadSlice, config: UploadConfiguration) -> List[str]:
    """Run the policy checks in order. Returns the effective allow-list."""
    check_file_size(upload.declared_total_size, config.max_size)
    return check_file_extension(upload.original_file_name, config.extensions)
