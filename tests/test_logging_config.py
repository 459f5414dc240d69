# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import unittest
from unittest.mock import patch

from storefront.config.logging_config import setup_logging
from storefront.config.settings import Settings


def _reset_logger() -> None:
    root_logger = logging.getLogger("storefront")
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Clean up the storefront logger before each test."""
        _reset_logger()
        self.addCleanup(_reset_logger)

    def test_setup_creates_log_file(self) -> None:
        """setup_logging returns a path that exists on disk."""
        log_path = setup_logging()
        self.assertTrue(log_path.exists())

    def test_log_file_naming_convention(self) -> None:
        """Log file name matches run_YYYYMMDD_HHMMSS.log format."""
        log_path = setup_logging()
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_file_handler_level_debug(self) -> None:
        setup_logging()
        root_logger = logging.getLogger("storefront")
        file_handlers = [
            h
            for h in root_logger.handlers
            if isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(file_handlers[0].level, logging.DEBUG)

    def test_console_handler_level_warning(self) -> None:
        setup_logging()
        root_logger = logging.getLogger("storefront")
        stream_handlers = [
            h
            for h in root_logger.handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(stream_handlers), 1)
        self.assertEqual(stream_handlers[0].level, logging.WARNING)

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        """Calling setup_logging twice does not duplicate handlers."""
        setup_logging()
        count_before = len(logging.getLogger("storefront").handlers)
        setup_logging()
        self.assertEqual(
            len(logging.getLogger("storefront").handlers), count_before
        )

    def test_child_logger_reaches_file(self) -> None:
        """Cart log lines land in the per-run file."""
        log_path = setup_logging()
        logging.getLogger("storefront.cart").info("cart line added")
        for handler in logging.getLogger("storefront").handlers:
            handler.flush()
        self.assertIn("cart line added", log_path.read_text("utf-8"))

    def test_module_levels_applied(self) -> None:
        setup_logging()
        for name, level in Settings.LOG_LEVELS.items():
            with self.subTest(logger=name):
                self.assertEqual(
                    logging.getLogger(name).level,
                    logging.getLevelName(level),
                )

    def test_filter_debug_lines_kept_out_of_file(self) -> None:
        """storefront.filters is capped at INFO; cart keeps DEBUG."""
        log_path = setup_logging()
        logging.getLogger("storefront.filters").debug("filter chatter")
        logging.getLogger("storefront.cart").debug("cart detail")
        for handler in logging.getLogger("storefront").handlers:
            handler.flush()
        text = log_path.read_text("utf-8")
        self.assertNotIn("filter chatter", text)
        self.assertIn("cart detail", text)

    def test_console_level_follows_settings(self) -> None:
        with patch.object(Settings, "CONSOLE_LOG_LEVEL", "ERROR"):
            setup_logging()
        stream_handlers = [
            h
            for h in logging.getLogger("storefront").handlers
            if not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(stream_handlers[0].level, logging.ERROR)

    def test_log_file_inside_logs_dir(self) -> None:
        log_path = setup_logging()
        self.assertEqual(log_path.parent.name, "logs")


if __name__ == "__main__":
    unittest.main()
