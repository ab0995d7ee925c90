"""Tests for root logger configuration."""
import logging
from logging.handlers import RotatingFileHandler

import pytest

from chrome_runner.log import get_log_level, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_console_handler_replaces_existing_handlers(restore_root_logger):
    root = restore_root_logger
    root.addHandler(logging.NullHandler())
    setup_logging(logging.WARNING, log_file="")
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)
    assert root.handlers[0].level == logging.WARNING
    assert root.level == logging.DEBUG


def test_file_handler_when_log_file_given(restore_root_logger, tmp_path):
    log_file = tmp_path / "runner.log"
    setup_logging(logging.INFO, log_file=str(log_file))
    file_handlers = [h for h in restore_root_logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    logging.getLogger("chrome_runner.test").debug("hello file")
    file_handlers[0].flush()
    assert "hello file" in log_file.read_text()


def test_log_level_names():
    assert get_log_level("debug") == logging.DEBUG
    assert get_log_level("ERROR") == logging.ERROR
    assert get_log_level("LOUD") == logging.INFO
