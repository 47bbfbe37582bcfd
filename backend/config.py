"""
Configuration constants and paths.
"""
import os
from pathlib import Path

from models.upload import UploadConfiguration
from utils.text import parse_size


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


# Base paths
ROOT_DIR = Path(__file__).resolve().parent.parent
STATIC_DIR = Path(os.getenv("UPLOAD_STATIC_DIR", ROOT_DIR / "static")).expanduser()
UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", STATIC_DIR / "images")).expanduser()
LOG_DIR = Path(os.getenv("UPLOAD_LOG_DIR", ROOT_DIR / "logs")).expanduser()
LOG_DIR.mkdir(parents=True, exist_ok=True)
LOG_FILE = LOG_DIR / "backend.log"

# Upload policy
ALLOWED_EXTENSIONS = os.getenv("UPLOAD_EXTENSIONS", "gif jpg png webp")
MAX_UPLOAD_SIZE = parse_size(os.getenv("UPLOAD_MAX_SIZE", "32M")) or 32 * 1024 * 1024
UPLOAD_NAME = os.getenv("UPLOAD_NAME", "")
UPLOAD_SUB = os.getenv("UPLOAD_SUB", "")
NORMALIZE_EXTENSIONS = _env_flag("UPLOAD_NORMALIZE")

# Partial files
CHUNK_SIZE = 4096
PARTIAL_PREFIX = "__"
PARTIAL_SEPARATOR = "·"
PARTIAL_MAX_AGE = int(os.getenv("UPLOAD_PARTIAL_MAX_AGE", 24 * 60 * 60))

# Multipart form field carrying slice bytes
UPLOAD_FIELD = "file"

PORT = int(os.getenv("PORT", 8000))


def load_upload_config() -> UploadConfiguration:
    """Build the upload policy from the environment-derived constants."""
    return UploadConfiguration(
        path=str(UPLOAD_DIR),
        extensions=ALLOWED_EXTENSIONS,
        max_size=MAX_UPLOAD_SIZE,
        name=UPLOAD_NAME,
        sub=UPLOAD_SUB,
        normalize=NORMALIZE_EXTENSIONS,
        public_root=str(STATIC_DIR.parent),
        chunk_size=CHUNK_SIZE,
    )
