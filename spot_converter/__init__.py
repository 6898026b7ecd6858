"""
spot-converter: Find the tracks of a Spotify playlist on YouTube Music.

For every source track the engine cleans the title, searches YouTube
Music with a few queries of decreasing precision, scores every result
against the track and keeps the best one if it scores high enough.

Architecture:
    spotify/    - Source side: SpotifyClient, fetch_playlist(), SourceTrack
    youtube/    - Target side: YTMusicSearchAdapter, Candidate
    matching/   - Engine: normalize, queries, scoring, MatchSelector,
                  ConversionOrchestrator
    core/       - Configuration, conversion history, logging, exceptions
    service.py  - Request boundary (validate, convert, record, serialize)
    cli.py      - Command-line interface

Usage:
    Command Line:
        spot-convert --url "https://open.spotify.com/playlist/..."
        spot-convert --tracks tracks.json --output result.json

    Python API:
        from spot_converter import (
            ConversionService, SourceTrack, load_config, setup_logging
        )

        config = load_config()
        setup_logging(config.output.directory)

        service = ConversionService.from_config(config)
        status, payload = service.handle_request({
            "tracks": [{"name": "Blinding Lights", "artists": ["The Weeknd"]}]
        })

Dependencies:
    - ytmusicapi: YouTube Music search
    - spotipy: Spotify API client
    - rapidfuzz: Edit distance for title similarity
    - rich-click: CLI colors
    - rich: Progress bar
    - tqdm: Progress-safe console logging
    - pyyaml: Configuration file parsing
"""

__version__ = "0.1.0"
__author__ = "spot-converter"
__license__ = "MIT"

from spot_converter.core import (
    Config,
    ConfigError,
    Database,
    DatabaseError,
    InvalidInputError,
    SpotConverterError,
    SpotifyError,
    YouTubeError,
    get_logger,
    load_config,
    setup_logging,
)
from spot_converter.matching import (
    ConversionOrchestrator,
    ConversionReport,
    ConversionResult,
    ConversionSummary,
    MatchSelector,
)
from spot_converter.service import ConversionService
from spot_converter.spotify import SourcePlaylist, SourceTrack, SpotifyClient
from spot_converter.youtube import Candidate, YTMusicSearchAdapter

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "load_config",
    "Database",
    "setup_logging",
    "get_logger",
    # Exceptions
    "SpotConverterError",
    "ConfigError",
    "DatabaseError",
    "InvalidInputError",
    "SpotifyError",
    "YouTubeError",
    # Engine
    "ConversionOrchestrator",
    "ConversionReport",
    "ConversionResult",
    "ConversionSummary",
    "MatchSelector",
    "ConversionService",
    # Models and clients
    "SourcePlaylist",
    "SourceTrack",
    "SpotifyClient",
    "Candidate",
    "YTMusicSearchAdapter",
]
