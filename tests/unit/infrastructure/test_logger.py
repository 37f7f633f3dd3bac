"""Unit tests for logging configuration."""

import logging
import sys

from s3_bootstrap.infrastructure.logger import setup_logger


def test_setup_logger_writes_to_stderr() -> None:
    """Test that log output never goes to stdout."""
    logger = setup_logger("s3_bootstrap.test.stderr")

    assert len(logger.handlers) == 1
    assert logger.handlers[0].stream is sys.stderr
    assert logger.level == logging.INFO


def test_setup_logger_verbose() -> None:
    """Test that verbose mode enables debug output."""
    logger = setup_logger("s3_bootstrap.test.verbose", verbose=True)

    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG


def test_setup_logger_is_idempotent() -> None:
    """Test that repeated setup does not duplicate handlers."""
    setup_logger("s3_bootstrap.test.repeat")
    logger = setup_logger("s3_bootstrap.test.repeat", verbose=True)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG

