"""Tests for logging helpers."""

import logging

from logging_config import log_event, setup_logger


def test_log_event_renders_non_empty_fields_as_json(caplog):
    logger = logging.getLogger("upload_tests.events")
    with caplog.at_level(logging.INFO, logger="upload_tests.events"):
        log_event("[upload] saved", logger, name="photo·1.jpg", size=3, skipped=None)

    assert caplog.messages == ['[upload] saved {"name": "photo·1.jpg", "size": 3}']


def test_setup_logger_attaches_handlers_once():
    logger = setup_logger("upload_tests.setup")
    again = setup_logger("upload_tests.setup")

    assert again is logger
    assert len(logger.handlers) == 2
