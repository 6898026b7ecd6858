"""
Logging configuration for spot-converter.

This module sets up the logging system with multiple outputs:
    - Console: Real-time progress with tqdm-compatible formatting
    - log_full.log: Complete log of all events (DEBUG and above)
    - log_errors.log: Only ERROR and CRITICAL level messages
    - match_failures.log: Tracks that could not be matched on YouTube Music

Everything shown on screen is also saved to file, then filtered into
specialized files.

Log File Locations:
    All log files are created in output_dir/logs, one set per run.

Usage:
    from spot_converter.core.logger import setup_logging, get_logger

    setup_logging(output_dir)  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Starting conversion")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

from tqdm import tqdm


# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that prefixes console records with a colored level name.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        return f"{color}{record.levelname}{Colors.RESET}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes to console without breaking progress bars.

    Progress bars redraw themselves in place with carriage returns, so a
    plain StreamHandler would tear them. tqdm.write() prints above any
    active bar instead.
    """

    def __init__(self, stream: TextIO = sys.stderr) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except Exception:
            self.handleError(record)


class MatchFailedTrackHandler(logging.Handler):
    """
    Handler that collects unmatched tracks into match_failures.log.

    Each unmatched track is written in a simple, human-readable block:

        Artist Name - Song Title
        reason: best score 1.85 below threshold 3.00

    Only records carrying a 'match_failed_track_name' extra field are
    written; every other record is ignored. Use log_match_failure() to
    produce such records.

    Attributes:
        report_path: Path to the match_failures.log file.
        report_file: Open file handle (None until open() is called).
    """

    def __init__(self, report_path: Path) -> None:
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """Open the report file for writing (overwrites existing content)."""
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "match_failed_track_name"):
            return

        if self.report_file is None:
            return

        try:
            track_name = getattr(record, "match_failed_track_name", "Unknown")
            artist = getattr(record, "match_failed_track_artist", "") or "Unknown"
            reason = getattr(record, "match_failed_reason", "")

            # Handler.handle() holds self.lock around emit(), worker threads are safe here
            self.report_file.write(f"{artist} - {track_name}\n")
            self.report_file.write(f"reason: {reason}\n\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the report file handle. Safe to call multiple times."""
        if self.report_file is not None:
            self.report_file.close()
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """Filter that only allows ERROR and CRITICAL level records."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(output_dir: Path, console_level: int = logging.INFO) -> None:
    """
    Configure the logging system for the application.

    This function should be called ONCE at application startup, after
    the configuration is loaded but before any other operations.

    Args:
        output_dir: Directory where log files will be created.
                    Logs are stored in a 'logs' subdirectory.
        console_level: Minimum level printed to the console.

    Behavior:
        1. Create output_dir/logs if it doesn't exist
        2. Configure root logger level to DEBUG and drop existing handlers
        3. Console handler (TqdmLoggingHandler, colored, console_level)
        4. logs/log_full_{timestamp}.log (DEBUG)
        5. logs/log_errors_{timestamp}.log (ERROR and above)
        6. logs/match_failures_{timestamp}.log (unmatched tracks only)

    Thread Safety:
        This function is NOT thread-safe. Call it once from the main
        thread before starting any worker threads.
    """
    logs_dir = output_dir / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ColoredConsoleFormatter())
    root_logger.addHandler(console_handler)

    full_log_path = logs_dir / f"log_full_{timestamp}.log"
    full_handler = logging.FileHandler(full_log_path, mode="w", encoding="utf-8")
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    root_logger.addHandler(full_handler)

    error_log_path = logs_dir / f"log_errors_{timestamp}.log"
    error_handler = logging.FileHandler(error_log_path, mode="w", encoding="utf-8")
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    error_handler.addFilter(ErrorOnlyFilter())
    root_logger.addHandler(error_handler)

    match_failures_path = logs_dir / f"match_failures_{timestamp}.log"
    match_handler = MatchFailedTrackHandler(match_failures_path)
    match_handler.open()
    root_logger.addHandler(match_handler)

    # urllib3 and spotipy are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("spotipy").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.

    Returns:
        logging.Logger configured by setup_logging().

    Note:
        Loggers obtained before setup_logging() is called have no handlers
        of their own and will not produce output until it runs.
    """
    return logging.getLogger(name)


def format_matched_message(artist: str, name: str, url: str) -> str:
    """Format a colored 'Matched' message for the progress bar."""
    return (
        f"{Colors.GREEN}Matched{Colors.RESET}: "
        f"{artist} - {name} -> "
        f"{Colors.CYAN}{url}{Colors.RESET}"
    )


def format_no_match_message(artist: str, name: str) -> str:
    """Format a colored 'No match' message for the progress bar."""
    return (
        f"{Colors.RED}No match{Colors.RESET}: "
        f"{artist or 'Unknown'} - {name}"
    )


def log_match_failure(
    logger: logging.Logger,
    track_name: str,
    artist: str,
    reason: str
) -> None:
    """
    Log a track that could not be matched.

    Attaches the extra fields MatchFailedTrackHandler uses to write
    match_failures.log. Logged at DEBUG: the record goes to the log files
    only, the console line comes from the progress bar.

    Example:
        log_match_failure(
            logger,
            track_name="Song Title",
            artist="Artist Name",
            reason="no candidates returned"
        )
    """
    logger.debug(
        f"No match: {artist or 'Unknown'} - {track_name} ({reason})",
        extra={
            "match_failed_track_name": track_name,
            "match_failed_track_artist": artist,
            "match_failed_reason": reason,
        }
    )


def shutdown_logging() -> None:
    """
    Flush, close and remove every handler of the root logger.

    Called in a finally block at application exit. After calling this
    function, logging will no longer produce output.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        handler.flush()
        handler.close()
        root_logger.removeHandler(handler)
