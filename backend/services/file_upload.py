"""
Chunked file upload service.

One call handles one slice: parse headers, check policy, append bytes to the
partial file and, on the last slice, promote the partial file to its
destination. Slices of one upload must arrive one at a time, in order; the
service does no locking or reordering of its own.
"""
from pathlib import Path
from typing import BinaryIO, Mapping

from config import PARTIAL_PREFIX
from logging_config import log_event
from models.upload import UploadConfiguration, UploadPending, UploadResult, UploadSlice
from services.descriptor import parse_slice
from services.errors import StorageError, UploadFailure, WriteError
from services.finalizer import finalize_upload
from services.rollback import rollback
from services.validation import validate_slice
from utils.fs import copy_in_chunks, ensure_directory, ensure_writable, list_stale_files, open_for_append, remove_file


def partial_path(upload: UploadSlice, config: UploadConfiguration) -> Path:
    return Path(config.path) / upload.working_name


def append_slice(path: Path, payload: BinaryIO, chunk_size: int = 4096) -> int:
    """Append payload to the partial file. Raises WriteError on read/write failure."""
    try:
        with open_for_append(path) as f:
            return copy_in_chunks(payload, f, chunk_size)
    except OSError as exc:
        raise WriteError(f"failed to upload data chunks to the file: {exc}") from exc


def run_upload(
    headers: Mapping[str, str],
    payload: BinaryIO,
    config: UploadConfiguration,
    logger,
) -> UploadResult:
    """Process one slice request and return its outcome."""
    try:
        upload = parse_slice(headers, normalize=config.normalize)
        extensions = validate_slice(upload, config)
        ensure_directory(config.path)
        ensure_writable(config.path)
    except UploadFailure as exc:
        return rollback(None, exc, logger)

    partial = partial_path(upload, config)
    try:
        written = append_slice(partial, payload, config.chunk_size)
        log_event(
            "[upload] slice_saved",
            logger,
            upload_id=upload.upload_id or None,
            slice=upload.slice_index,
            slices=upload.total_slices,
            declared_size=upload.declared_slice_size,
            size_bytes=written,
        )
        if not upload.is_last:
            return UploadPending(
                id=upload.upload_id,
                slice_index=upload.slice_index,
                total_slices=upload.total_slices,
            )
        return finalize_upload(partial, upload, config, extensions, logger)
    except UploadFailure as exc:
        return rollback(partial, exc, logger)
    except OSError as exc:
        return rollback(partial, StorageError(f"Failed to store upload:\n {exc}"), logger)


def reclaim_partials(config: UploadConfiguration, max_age: float, logger) -> list:
    """Delete partial files of abandoned uploads older than max_age seconds."""
    removed = []
    for p in list_stale_files(config.path, PARTIAL_PREFIX, max_age):
        try:
            if remove_file(p):
                removed.append(p.name)
        except OSError:
            logger.warning("[cleanup_partials] remove_failed path=%s", p)
    log_event("[cleanup_partials] done", logger, removed=removed, max_age=max_age)
    return removed
