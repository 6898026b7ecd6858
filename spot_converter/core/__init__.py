"""
Core module for spot-converter.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation (including scoring weights)
    - database: Thread-safe SQLite conversion history
    - logger: Logging system with multiple outputs
    - progress: Rich progress bar for the matching phase

Usage:
    from spot_converter.core import (
        Config, load_config,
        Database,
        setup_logging, get_logger,
        SpotConverterError, ConfigError, DatabaseError
    )
"""

from spot_converter.core.config import (
    Config,
    ConversionConfig,
    MatchingConfig,
    OutputConfig,
    ScoringWeights,
    SpotifyConfig,
    YouTubeConfig,
    load_config,
)
from spot_converter.core.database import Database
from spot_converter.core.exceptions import (
    ConfigError,
    DatabaseError,
    InvalidInputError,
    SpotConverterError,
    SpotifyError,
    YouTubeError,
)
from spot_converter.core.logger import (
    get_logger,
    log_match_failure,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "ConversionConfig",
    "MatchingConfig",
    "OutputConfig",
    "ScoringWeights",
    "SpotifyConfig",
    "YouTubeConfig",
    "load_config",
    # Database
    "Database",
    # Exceptions
    "SpotConverterError",
    "ConfigError",
    "DatabaseError",
    "InvalidInputError",
    "SpotifyError",
    "YouTubeError",
    # Logger
    "setup_logging",
    "get_logger",
    "log_match_failure",
    "shutdown_logging",
]
