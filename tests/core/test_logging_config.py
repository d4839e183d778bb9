"""Tests for the logging helpers."""

import logging

import pytest

from duplex_copy.core.logging_config import (
    LOGGER_NAME,
    RELATED_LOGGERS,
    LoggerMixin,
    apply_logger_overrides,
    configure_logging,
    get_logger,
)


@pytest.fixture
def restore_loggers():
    """Put logger levels and handlers back after a test."""
    names = [LOGGER_NAME, *RELATED_LOGGERS, "duplex_copy.executor"]
    saved = {name: (logging.getLogger(name).level, list(logging.getLogger(name).handlers)) for name in names}
    yield
    for name, (level, handlers) in saved.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers = handlers


class TestGetLogger:
    def test_main_logger(self):
        assert get_logger().name == "duplex_copy"

    def test_child_logger(self):
        assert get_logger("planner").name == "duplex_copy.planner"

    def test_mixin_uses_class_name(self):
        class Store(LoggerMixin):
            pass

        assert Store()._logger.name == "duplex_copy.Store"


class TestConfigureLogging:
    def test_sets_levels(self, restore_loggers):
        handler = logging.NullHandler()
        logger = configure_logging(level=logging.DEBUG, library_level=logging.ERROR, handler=handler)

        assert logger.level == logging.DEBUG
        for name in RELATED_LOGGERS:
            assert logging.getLogger(name).level == logging.ERROR

    def test_library_level_defaults_to_level(self, restore_loggers):
        configure_logging(level=logging.INFO, handler=logging.NullHandler())
        assert logging.getLogger("urllib3").level == logging.INFO

    def test_handler_added_once(self, restore_loggers):
        logging.getLogger(LOGGER_NAME).handlers = []
        configure_logging(handler=logging.NullHandler())
        configure_logging(handler=logging.NullHandler())
        assert len(logging.getLogger(LOGGER_NAME).handlers) == 1

    def test_overrides(self, restore_loggers):
        apply_logger_overrides({"duplex_copy.executor": logging.DEBUG, "urllib3": logging.CRITICAL})
        assert logging.getLogger("duplex_copy.executor").level == logging.DEBUG
        assert logging.getLogger("urllib3").level == logging.CRITICAL
