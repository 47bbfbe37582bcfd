"""
Error middleware: remove the partial file, then report the failure.
"""
from pathlib import Path
from typing import Optional, Union

from logging_config import log_event
from models.upload import UploadError
from services.errors import UploadFailure
from utils.fs import remove_file


def rollback(file_path: Optional[Union[str, Path]], error: UploadFailure, logger) -> UploadError:
    """Delete file_path (if given and present) and turn error into an UploadError."""
    removed = False
    if file_path:
        try:
            removed = remove_file(file_path)
        except OSError:
            logger.exception("[upload] rollback_failed path=%s", file_path)
    log_event(
        "[upload] failed",
        logger,
        error=error.message,
        status=error.status,
        kind=type(error).__name__,
        rolled_back=str(file_path) if removed else None,
    )
    return UploadError(message=error.message, status=error.status)
