"""
Data model for chunked uploads.
"""
from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class UploadConfiguration:
    """Per-call upload policy."""

    path: str
    extensions: str
    max_size: int
    name: str = ""
    sub: str = ""
    normalize: bool = False
    public_root: Optional[str] = None
    chunk_size: int = 4096


@dataclass(frozen=True)
class UploadSlice:
    """Metadata of one inbound slice request."""

    upload_id: str
    original_file_name: str
    working_name: str
    slice_index: int
    total_slices: int
    declared_total_size: int
    declared_slice_size: int
    group_parameter: str = ""

    @property
    def is_last(self) -> bool:
        # exact equality: an index past the declared total never finalizes
        return self.slice_index == self.total_slices


@dataclass(frozen=True)
class UploadSuccess:
    id: str
    file: str
    name: str
    path: str
    parameter: str = ""
    status: int = 200

    def to_message(self) -> dict:
        return {
            "Id": self.id,
            "File": self.file,
            "Name": self.name,
            "Path": self.path,
            "Parameter": self.parameter,
            "Error": "",
            "Status": self.status,
        }


@dataclass(frozen=True)
class UploadPending:
    """Slice stored, more slices expected."""

    id: str
    slice_index: int
    total_slices: int


@dataclass(frozen=True)
class UploadError:
    message: str
    status: int = 500

    def to_message(self) -> dict:
        return {
            "Id": "",
            "File": "",
            "Name": "",
            "Path": "",
            "Parameter": "",
            "Error": self.message,
            "Status": self.status,
        }


UploadResult = Union[UploadSuccess, UploadPending, UploadError]
