"""Test logging setup"""

import io
import logging

import pytest

from spot_converter.core.logger import (
    ErrorOnlyFilter,
    TqdmLoggingHandler,
    format_matched_message,
    format_no_match_message,
    get_logger,
    log_match_failure,
    setup_logging,
    shutdown_logging,
)


@pytest.fixture
def isolated_root_logger():
    """Restore the root logger's handlers and level after the test"""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    shutdown_logging()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLogging:
    """Test setup_logging() and helpers"""

    def test_creates_log_files(self, temp_dir, isolated_root_logger):
        """Test the three log files are created under logs/"""
        setup_logging(temp_dir)
        logger = get_logger("spot_converter.test")

        logger.debug("debug line")
        logger.error("error line")
        log_match_failure(logger, "Blinding Lights", "The Weeknd", "no acceptable candidate")
        shutdown_logging()

        logs_dir = temp_dir / "logs"
        full_log = next(logs_dir.glob("log_full_*.log")).read_text(encoding="utf-8")
        error_log = next(logs_dir.glob("log_errors_*.log")).read_text(encoding="utf-8")
        failures = next(logs_dir.glob("match_failures_*.log")).read_text(encoding="utf-8")

        assert "debug line" in full_log
        assert "error line" in full_log
        assert "error line" in error_log
        assert "debug line" not in error_log
        assert "The Weeknd - Blinding Lights" in failures
        assert "reason: no acceptable candidate" in failures
        assert "error line" not in failures

    def test_match_failure_not_echoed_to_console(self, temp_dir, isolated_root_logger):
        """Test match failures reach match_failures.log but not the console"""
        setup_logging(temp_dir)
        console = io.StringIO()
        for handler in isolated_root_logger.handlers:
            if isinstance(handler, TqdmLoggingHandler):
                handler.stream = console

        log_match_failure(get_logger("spot_converter.test"), "Song", "Artist", "no acceptable candidate")
        shutdown_logging()

        failures = next((temp_dir / "logs").glob("match_failures_*.log")).read_text(encoding="utf-8")
        assert "Artist - Song" in failures
        assert console.getvalue() == ""

    def test_shutdown_removes_handlers(self, temp_dir, isolated_root_logger):
        """Test shutdown_logging() leaves the root logger bare"""
        setup_logging(temp_dir)
        assert isolated_root_logger.handlers

        shutdown_logging()

        assert isolated_root_logger.handlers == []

    def test_error_only_filter(self):
        """Test the filter keeps ERROR and above"""
        log_filter = ErrorOnlyFilter()

        def record(level):
            return logging.LogRecord("x", level, __file__, 1, "msg", None, None)

        assert log_filter.filter(record(logging.ERROR))
        assert log_filter.filter(record(logging.CRITICAL))
        assert not log_filter.filter(record(logging.WARNING))

    def test_format_messages(self):
        """Test progress bar messages carry the track"""
        matched = format_matched_message("The Weeknd", "Blinding Lights", "https://music.youtube.com/watch?v=abc123")
        no_match = format_no_match_message("", "Blinding Lights")

        assert "The Weeknd - Blinding Lights" in matched
        assert "watch?v=abc123" in matched
        assert "Unknown - Blinding Lights" in no_match
