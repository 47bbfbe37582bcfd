"""
Filesystem helpers used by the upload pipeline.
"""
import os
import shutil
import stat
import time
from pathlib import Path
from typing import BinaryIO, List, Union

from services.errors import StorageError

PathLike = Union[str, Path]


def ensure_directory(path: PathLike) -> Path:
    """Create directory (recursively) if missing. Calling it twice is a no-op."""
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except FileExistsError as exc:
        raise StorageError(f"{path} is not a directory") from exc
    except OSError as exc:
        raise StorageError(f"Failed to create directory:\n {exc}") from exc
    if not path.is_dir():
        raise StorageError(f"{path} is not a directory")
    return path


def ensure_writable(path: PathLike) -> Path:
    """
    Make sure the owner can write into the directory.
    Adds the owner-write bit when it is missing.
    """
    path = Path(path)
    try:
        info = path.stat()
    except OSError as exc:
        raise StorageError(f"Failed to get directory information:\n {exc}") from exc
    if not stat.S_ISDIR(info.st_mode):
        raise StorageError(f"{path} is not a directory")
    if info.st_mode & stat.S_IWUSR == 0:
        try:
            path.chmod(stat.S_IMODE(info.st_mode) | stat.S_IWUSR)
        except OSError as exc:
            raise StorageError(f"failed to set directory {path} writable: {exc}") from exc
    return path


def open_for_append(path: PathLike) -> BinaryIO:
    """Open file for binary append, creating it if absent."""
    return open(path, "ab")


def copy_in_chunks(source: BinaryIO, target: BinaryIO, chunk_size: int = 4096) -> int:
    """Copy stream in fixed-size blocks until exhausted. Returns bytes written."""
    start = target.tell()
    shutil.copyfileobj(source, target, chunk_size)
    return target.tell() - start


def replace_file(source: PathLike, destination: PathLike) -> Path:
    """Atomically move source onto destination (overwrites an existing file)."""
    source = Path(source)
    if not source.exists():
        raise StorageError(f"Source file not found: {source.name}")
    try:
        os.replace(source, destination)
    except OSError as exc:
        raise StorageError(f"Failed to move file:\n {exc}") from exc
    return Path(destination)


def remove_file(path: PathLike) -> bool:
    """Delete the file if it exists. Returns True when something was removed."""
    path = Path(path)
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True


def list_stale_files(directory: PathLike, prefix: str, max_age: float) -> List[Path]:
    """Files in directory whose name starts with prefix and older than max_age seconds."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    cutoff = time.time() - max_age
    stale = []
    for p in sorted(directory.iterdir()):
        if not p.name.startswith(prefix) or not p.is_file():
            continue
        try:
            if p.stat().st_mtime <= cutoff:
                stale.append(p)
        except FileNotFoundError:
            continue
    return stale
