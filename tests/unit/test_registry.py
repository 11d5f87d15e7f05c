"""
Module: test_registry.py
Description: Unit tests for the process-wide default logger.
"""

import pytest

from app_logger.logger import Logger
from app_logger.registry import (
    close_default_logger,
    default_logger,
    has_default_logger,
    init_default_logger,
)


class TestDefaultLogger:
    """Test cases for init/get/close of the default logger."""

    def test_not_initialized(self):
        """Test fetching before init is an error."""
        assert has_default_logger() is False
        with pytest.raises(RuntimeError, match="not initialized"):
            default_logger()

    def test_init_with_logger(self, output):
        """Test an explicit logger is installed and returned."""
        logger = Logger(output)

        assert init_default_logger(logger) is logger
        assert default_logger() is logger

        default_logger().info("hello")
        assert output.getvalue() == "INFO: hello\n"

    def test_init_with_options(self, output):
        """Test a logger is built from constructor options."""
        logger = init_default_logger(output=output, level="warn")

        assert logger.level.name == "WARN"
        assert default_logger() is logger

    def test_init_once(self, output):
        """Test a second init without replace is rejected."""
        init_default_logger(Logger(output))

        with pytest.raises(RuntimeError, match="already initialized"):
            init_default_logger(Logger(output))

    def test_replace(self, output):
        """Test replace=True swaps the default logger."""
        init_default_logger(Logger(output))
        replacement = Logger(output)

        init_default_logger(replacement, replace=True)

        assert default_logger() is replacement

    def test_logger_and_options_conflict(self, output):
        """Test passing both a logger and options is rejected."""
        with pytest.raises(ValueError):
            init_default_logger(Logger(output), level="info")

    def test_close(self, fake_client):
        """Test close releases the logger's resources and uninstalls it."""
        init_default_logger(Logger("orders", client=fake_client))

        close_default_logger()

        assert fake_client.closed is True
        assert has_default_logger() is False
