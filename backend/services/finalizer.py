"""
Finalization of a completed upload: destination resolution and promotion.
"""
import re
from pathlib import Path
from typing import Iterable, Optional

from logging_config import log_event
from models.upload import UploadConfiguration, UploadSlice, UploadSuccess
from services.errors import StorageError
from utils.fs import ensure_directory, replace_file
from utils.text import file_extension


def destination_directory(config: UploadConfiguration) -> Path:
    """Upload directory, or its configured sub-directory (created on demand)."""
    base = Path(config.path)
    if not config.sub:
        return base
    return ensure_directory(base / config.sub)


def unique_name(directory: Path, file_name: str, base: str, extensions: Iterable[str]) -> str:
    """
    Next free "<base>-<N><ext>" name in directory.

    N is one more than the largest number already used by files named
    "<base>-<N>.<allowed ext>". Gaps left by deleted files are never reused.
    """
    allowed = "|".join(re.escape(ext) for ext in extensions)
    # extension case is kept from the client, so "photo-1.PNG" counts too
    pattern = re.compile(rf"{re.escape(base)}-(\d+)\.({allowed})", re.IGNORECASE)
    highest = 0
    try:
        entries = list(directory.iterdir()) if directory.is_dir() else []
    except OSError as exc:
        raise StorageError(f"Failed to read directory {directory.name}:\n {exc}") from exc
    for entry in entries:
        match = pattern.fullmatch(entry.name)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{base}-{highest + 1}{file_extension(file_name)}"


def public_path(path: Path, public_root: Optional[str], base: Optional[str] = None) -> str:
    """
    Path as reported to clients: relative to public_root with a leading "/".

    Paths outside public_root are reported relative to the parent of base
    (the upload directory), so the server-side root never leaks.
    """
    resolved = path.resolve()
    roots = [r for r in (public_root, Path(base).resolve().parent if base else None) if r]
    for root in roots:
        try:
            relative = resolved.relative_to(Path(root).resolve()).as_posix()
        except ValueError:
            continue
        return "/" if relative == "." else "/" + relative
    return "/" + resolved.name


def finalize_upload(
    partial: Path,
    upload: UploadSlice,
    config: UploadConfiguration,
    extensions: Iterable[str],
    logger,
) -> UploadSuccess:
    """Move the partial file to its destination. Raises StorageError on failure."""
    directory = destination_directory(config)
    name = upload.original_file_name
    if config.name:
        name = unique_name(directory, name, config.name, extensions)

    directory_path = public_path(directory, config.public_root, config.path)
    if not directory_path.endswith("/"):
        directory_path += "/"
    result = UploadSuccess(
        id=upload.upload_id,
        file=directory_path + name,
        name=name,
        path=directory_path,
        parameter=upload.group_parameter,
    )
    destination = replace_file(partial, directory / name)
    log_event(
        "[upload] finalized",
        logger,
        upload_id=upload.upload_id or None,
        name=name,
        path=str(destination),
        slices=upload.total_slices,
    )
    return result
