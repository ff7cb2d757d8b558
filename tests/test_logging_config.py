"""
Tests for the logging setup.
"""

import json
import logging

import pytest

from app.core.logging_config import CustomJsonFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield root_logger
    root_logger.handlers = handlers
    root_logger.setLevel(level)


def make_record(level):
    return logging.LogRecord("app.crud.job", level, "job.py", 42, "Updated job %s", (7,), None)


class TestSetupLogging:
    """Test root logger configuration"""

    def test_json_handler(self, restore_root_logger):
        setup_logging(log_level="debug", json_logs=True)

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, CustomJsonFormatter)
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_plain_handler(self, restore_root_logger):
        setup_logging(log_level="INFO", json_logs=False)

        assert not isinstance(restore_root_logger.handlers[0].formatter, CustomJsonFormatter)


class TestJsonFormatter:
    """Test JSON log record fields"""

    def test_info_record(self):
        formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(logger)s %(message)s')
        entry = json.loads(formatter.format(make_record(logging.INFO)))

        assert entry["message"] == "Updated job 7"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "app.crud.job"
        assert "line" not in entry

    def test_warning_record_has_location(self):
        formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(logger)s %(message)s')
        entry = json.loads(formatter.format(make_record(logging.WARNING)))

        assert entry["line"] == 42
        assert entry["pathname"] == "job.py"
