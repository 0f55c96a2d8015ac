"""Tests for logging set-up."""

import logging

from venncv.logging_config import setup_logging


def test_setup_logging_is_repeatable():
    setup_logging(logging.DEBUG)
    setup_logging(logging.WARNING)
    logger = logging.getLogger("venncv")
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / "venncv.log"
    setup_logging(logging.DEBUG, str(log_file))
    logging.getLogger("venncv.layout").debug("placed")
    for handler in logging.getLogger("venncv").handlers:
        handler.flush()
    assert "placed" in log_file.read_text()
    setup_logging(logging.WARNING)
