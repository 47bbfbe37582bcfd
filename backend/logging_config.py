"""
Logging configuration.
"""
import json
import logging
from logging.handlers import RotatingFileHandler

from config import LOG_FILE


def setup_logger(name: str = "upload_backend") -> logging.Logger:
    """Attach console and rotating-file handlers once per process."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s %(name)s [%(levelname)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )
    for handler in (
        logging.StreamHandler(),
        RotatingFileHandler(LOG_FILE, maxBytes=1_000_000, backupCount=5),
    ):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def log_event(event: str, logger: logging.Logger, **kwargs):
    """
    Log an "[area] action" event followed by its non-empty fields as JSON.
    """
    payload = {k: v for k, v in kwargs.items() if v is not None}
    try:
        formatted = json.dumps(payload, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        formatted = str(payload)
    logger.info("%s %s", event, formatted)
