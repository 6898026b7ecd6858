"""
YouTube Music search adapter built on ytmusicapi.

The adapter turns one text query into a list of Candidates. It merges the
results of every configured search filter ("songs" first, then "videos")
and drops duplicate video IDs, so catalog songs outrank plain videos at
equal score.

search() does not retry. A request exception propagates and
MatchSelector treats it as a query with no results.

Usage:
    adapter = YTMusicSearchAdapter()
    adapter.ensure_ready()            # raises YouTubeError if unusable
    candidates = adapter.search("Blinding Lights The Weeknd")
"""

import threading
from typing import Any, Sequence

from ytmusicapi import YTMusic

from spot_converter.core.config import DEFAULT_SEARCH_FILTERS, YouTubeConfig
from spot_converter.core.exceptions import YouTubeError
from spot_converter.core.logger import get_logger
from spot_converter.youtube.models import Candidate


logger = get_logger(__name__)


class YTMusicSearchAdapter:
    """
    Search adapter backed by an unauthenticated YTMusic client.

    Attributes:
        language: Interface language passed to YTMusic.
        search_filters: ytmusicapi filters queried for each search, in order.
        limit: Maximum results requested per filter.

    Thread Safety:
        The YTMusic client is created lazily, at most once, under a lock.
        After that search() only reads shared state and can run from
        several worker threads.
    """

    def __init__(
        self,
        language: str = "en",
        search_filters: Sequence[str] = DEFAULT_SEARCH_FILTERS,
        limit: int = 20,
    ) -> None:
        self.language = language
        self.search_filters = tuple(search_filters)
        self.limit = limit
        self._client: YTMusic | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: YouTubeConfig) -> "YTMusicSearchAdapter":
        return cls(
            language=config.language,
            search_filters=config.search_filters,
            limit=config.limit,
        )

    def ensure_ready(self) -> None:
        """
        Build the YTMusic client now instead of on the first search.

        Raises:
            YouTubeError: If the client cannot be constructed.
        """
        self._get_client()

    def _get_client(self) -> YTMusic:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    try:
                        self._client = YTMusic(language=self.language)
                    except Exception as e:
                        raise YouTubeError(
                            f"Failed to initialize YouTube Music client: {e}",
                            details={"language": self.language}
                        ) from e
                    logger.debug(f"YouTube Music client ready (language: {self.language})")
        return self._client

    def search(self, query: str) -> list[Candidate]:
        """
        Search YouTube Music for a text query.

        Args:
            query: Search query string (e.g. "Blinding Lights The Weeknd").

        Returns:
            Candidates in relevance order, one per video ID. Raw results
            without a videoId (albums, artists, playlists) are skipped.

        Raises:
            YouTubeError: If the client cannot be constructed.
            Exception: Whatever ytmusicapi raises for the request itself.
        """
        client = self._get_client()

        candidates: list[Candidate] = []
        seen_ids: set[str] = set()

        for search_filter in self.search_filters:
            raw_results: list[dict[str, Any]] = client.search(
                query,
                filter=search_filter,
                limit=self.limit,
            ) or []

            for raw in raw_results:
                video_id = raw.get("videoId")
                if not video_id or video_id in seen_ids:
                    continue

                try:
                    candidate = Candidate.from_ytmusic_result(raw)
                except (ValueError, KeyError, TypeError) as e:
                    logger.debug(f"Failed to parse search result: {e}")
                    continue

                seen_ids.add(video_id)
                candidates.append(candidate)

        logger.debug(f"Query '{query}' returned {len(candidates)} candidates")
        return candidates
