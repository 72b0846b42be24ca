"""Tests for logging setup."""
import logging

import pytest

from malaria_chat.utils.logging import setup_logging


@pytest.fixture
def root_logger():
    """Restore the root logger after each test."""
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_second_call_applies_new_level(self, root_logger):
        setup_logging("WARNING")
        setup_logging("DEBUG")

        assert root_logger.level == logging.DEBUG

    def test_repeated_calls_do_not_stack_handlers(self, root_logger):
        setup_logging("INFO")
        setup_logging("INFO")

        assert len(root_logger.handlers) == 1

    def test_unknown_level_falls_back_to_info(self, root_logger):
        setup_logging("chatty")

        assert root_logger.level == logging.INFO

    def test_quiets_http_client_loggers(self, root_logger):
        setup_logging("DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
