"""
Conversion request boundary.

ConversionService ties the engine to its collaborators: it validates a
request body, runs the conversion, records the summary in the history
database and serializes the outcome.

Request body (dict or JSON text):

    {
        "tracks": [{"name": "Blinding Lights", "artists": ["The Weeknd"]}],
        "playlistName": "My Playlist",                       # optional
        "spotifyUrl": "https://open.spotify.com/playlist/..." # optional
    }

handle_request() never raises. It returns (status, payload):

    200  {"results": [...], "summary": {...}, "youtubePlaylistUrl": ...}
    400  {"error": "..."}   body is not valid (nothing was searched)
    503  {"error": "..."}   YouTube Music client could not be created
    500  {"error": "..."}   anything else

Failing to record the history row is logged and does not change the
response.
"""

import json
from typing import Any

from spot_converter.core.config import Config
from spot_converter.core.database import Database
from spot_converter.core.exceptions import DatabaseError, InvalidInputError, YouTubeError
from spot_converter.core.logger import get_logger
from spot_converter.core.progress import MatchingProgressBar
from spot_converter.matching.converter import ConversionOrchestrator
from spot_converter.matching.models import ConversionReport
from spot_converter.matching.selector import MatchSelector, SearchAdapter
from spot_converter.spotify.models import SourceTrack
from spot_converter.youtube.client import YTMusicSearchAdapter


logger = get_logger(__name__)


def parse_request(body: Any) -> tuple[list[SourceTrack], str | None, str | None]:
    """
    Validate a request body.

    Args:
        body: Decoded JSON object, or JSON text (str/bytes).

    Returns:
        (tracks, playlist_name, spotify_url)

    Raises:
        InvalidInputError: On malformed JSON, a missing or non-array
                           'tracks', a malformed track item, or a
                           non-string 'playlistName'/'spotifyUrl'.
    """
    if isinstance(body, (str, bytes, bytearray)):
        try:
            body = json.loads(body)
        except ValueError as e:
            raise InvalidInputError("Invalid JSON body") from e

    if not isinstance(body, dict):
        raise InvalidInputError("Invalid JSON body")

    raw_tracks = body.get("tracks")
    if not isinstance(raw_tracks, list):
        raise InvalidInputError(
            "Tracks array is required",
            details={"field": "tracks"}
        )

    tracks = [SourceTrack.from_dict(item, index=i) for i, item in enumerate(raw_tracks)]

    optional: dict[str, str | None] = {}
    for field in ("playlistName", "spotifyUrl"):
        value = body.get(field)
        if value is not None and not isinstance(value, str):
            raise InvalidInputError(
                f"{field} must be a string",
                details={"field": field}
            )
        optional[field] = value

    return tracks, optional["playlistName"], optional["spotifyUrl"]


class ConversionService:
    """
    Runs conversions end to end.

    Attributes:
        orchestrator: Engine entry point.
        search_adapter: The orchestrator's search collaborator; made
                        ready before any track is resolved.
        database: Conversion history, or None to skip recording.
    """

    def __init__(
        self,
        orchestrator: ConversionOrchestrator,
        search_adapter: SearchAdapter,
        database: Database | None = None,
    ) -> None:
        self.orchestrator = orchestrator
        self.search_adapter = search_adapter
        self.database = database

    @classmethod
    def from_config(
        cls,
        config: Config,
        database: Database | None = None,
        threads: int | None = None,
    ) -> "ConversionService":
        """
        Build a service with the ytmusicapi adapter.

        Args:
            config: Loaded application config.
            database: Conversion history (optional).
            threads: Overrides config.conversion.threads when given.
        """
        adapter = YTMusicSearchAdapter.from_config(config.youtube)
        selector = MatchSelector(
            adapter,
            weights=config.matching.weights,
            query_templates=config.matching.query_templates,
        )
        orchestrator = ConversionOrchestrator(
            selector,
            max_workers=threads or config.conversion.threads,
        )
        return cls(orchestrator, adapter, database)

    def convert(
        self,
        tracks: list[SourceTrack],
        playlist_name: str | None = None,
        spotify_url: str | None = None,
        progress_bar: MatchingProgressBar | None = None,
    ) -> ConversionReport:
        """
        Convert tracks and record the summary.

        Raises:
            YouTubeError: If the search client cannot be created.
        """
        self.search_adapter.ensure_ready()

        report = self.orchestrator.convert(tracks, progress_bar=progress_bar)
        self._record(report, playlist_name, spotify_url)
        return report

    def handle_request(self, body: Any) -> tuple[int, dict[str, Any]]:
        """
        Handle one conversion request.

        Returns:
            (HTTP-style status code, JSON-serializable payload).
        """
        try:
            tracks, playlist_name, spotify_url = parse_request(body)
        except InvalidInputError as e:
            logger.warning(f"Rejected conversion request: {e.message}")
            return 400, {"error": e.message}

        try:
            report = self.convert(tracks, playlist_name, spotify_url)
        except YouTubeError as e:
            logger.error(f"YouTube Music unavailable: {e.message}")
            return 503, {"error": e.message}
        except Exception as e:
            logger.error(f"Error converting to YouTube Music: {e}", exc_info=True)
            return 500, {"error": str(e) or "An unknown error occurred"}

        return 200, report.to_dict()

    def _record(
        self,
        report: ConversionReport,
        playlist_name: str | None,
        spotify_url: str | None,
    ) -> None:
        if self.database is None:
            return

        try:
            self.database.record_conversion(
                report.summary,
                playlist_url=spotify_url,
                playlist_name=playlist_name,
                youtube_playlist_url=report.playlist_url,
            )
        except DatabaseError as e:
            logger.error(f"Failed to record conversion history: {e}")
