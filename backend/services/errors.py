"""
Upload failure types.
"""


class UploadFailure(Exception):
    """Base failure carrying a client-facing message and an HTTP status."""

    status = 500

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class DescriptorError(UploadFailure):
    """Slice headers are missing or malformed."""

    status = 400


class PolicyError(UploadFailure):
    """Declared size or extension is not allowed."""


class StorageError(UploadFailure):
    """Upload directory cannot be created, written or renamed into."""


class WriteError(UploadFailure):
    """Slice bytes could not be read from the request or appended to disk."""
