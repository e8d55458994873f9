"""Tests for setup_logging()."""

import logging

from src.infrastructure.logging_config import setup_logging


def test_sqlalchemy_engine_logger_is_quieted():
    setup_logging("DEBUG")
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_unknown_level_name_does_not_raise():
    setup_logging("not-a-level")
