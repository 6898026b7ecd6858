"""
Single-track resolution: from a Spotify track to one YouTube video ID.

Matching Algorithm:
    1. Clean the Spotify title (feature credits, soundtrack attributions, ...)
    2. Generate search queries in priority order
    3. For each query, search YouTube Music and score every result
    4. Keep the single best result across all queries (ties keep the
       earliest: earlier query, then earlier position)
    5. Stop issuing queries once the best score exceeds good_enough_score
    6. Accept the best result only if it reaches acceptance_threshold

A failed search (network error, malformed response, timeout) counts as a
query with no results; the next query is tried.
"""

from typing import Protocol, Sequence

from spot_converter.core.config import DEFAULT_QUERY_TEMPLATES, ScoringWeights
from spot_converter.core.logger import get_logger
from spot_converter.matching.models import ScoredCandidate
from spot_converter.matching.normalize import clean_title
from spot_converter.matching.queries import generate_queries
from spot_converter.matching.scoring import score_candidate
from spot_converter.spotify.models import SourceTrack
from spot_converter.youtube.models import Candidate


logger = get_logger(__name__)


class SearchAdapter(Protocol):
    """
    Search capability consumed by MatchSelector.

    search() returns results for one query in relevance order. It may
    return an empty sequence and may raise; MatchSelector treats an
    exception as an empty result. ensure_ready() builds any expensive
    client up front and raises YouTubeError if that is impossible.
    """

    def search(self, query: str) -> Sequence[Candidate]:
        ...

    def ensure_ready(self) -> None:
        ...


class MatchSelector:
    """
    Picks the best YouTube Music candidate for a single track.

    Attributes:
        search_adapter: Search collaborator, shared across tracks.
        weights: Scoring constants and thresholds.
        query_templates: Search templates in priority order.

    Thread Safety:
        resolve() keeps all per-track state in local variables and can
        be called from several threads at once, provided the search
        adapter is thread-safe.

    Example:
        selector = MatchSelector(YTMusicSearchAdapter())
        video_id = selector.select_match(SourceTrack("Blinding Lights", ("The Weeknd",)))
    """

    def __init__(
        self,
        search_adapter: SearchAdapter,
        weights: ScoringWeights | None = None,
        query_templates: Sequence[str] = DEFAULT_QUERY_TEMPLATES,
    ) -> None:
        self.search_adapter = search_adapter
        self.weights = weights or ScoringWeights()
        self.query_templates = tuple(query_templates)

    def select_match(self, track: SourceTrack) -> str | None:
        """
        Resolve a track to a YouTube video ID.

        Returns:
            ID of the accepted candidate, or None if the track is unmatched.
        """
        accepted = self.resolve(track)
        return accepted.candidate.id if accepted else None

    def resolve(self, track: SourceTrack) -> ScoredCandidate | None:
        """
        Resolve a track to its accepted candidate and score.

        Args:
            track: The Spotify track to resolve.

        Returns:
            The best ScoredCandidate if its score meets the acceptance
            threshold, None otherwise (including when every query
            returned nothing).
        """
        queries = generate_queries(
            clean_title(track.name),
            track.primary_artist,
            original_title=track.name,
            templates=self.query_templates,
        )
        if not queries:
            logger.debug("Nothing to search for: track has no title and no artist")
            return None

        best: ScoredCandidate | None = None

        for query in queries:
            for candidate in self._search(query):
                score = score_candidate(track, candidate, self.weights)
                # Strict comparison: ties keep the earlier candidate
                if best is None or score > best.score:
                    best = ScoredCandidate(candidate=candidate, score=score)

            if best is not None and best.score > self.weights.good_enough_score:
                logger.debug(
                    f"Good enough match after query '{query}': "
                    f"{best.candidate.title} (score: {best.score:.2f})"
                )
                break

        if best is None:
            logger.debug(f"No candidates for: {track.primary_artist} - {track.name}")
            return None

        if best.score < self.weights.acceptance_threshold:
            logger.debug(
                f"Best candidate '{best.candidate.title}' for "
                f"{track.primary_artist} - {track.name} rejected "
                f"(score: {best.score:.2f} < {self.weights.acceptance_threshold:.2f})"
            )
            return None

        logger.debug(
            f"Matched {track.primary_artist} - {track.name} -> "
            f"{best.candidate.title} [{best.candidate.id}] (score: {best.score:.2f})"
        )
        return best

    def _search(self, query: str) -> list[Candidate]:
        """
        Run one query, treating any failure as zero results.

        Items that are not Candidate instances (malformed adapter output)
        are dropped.
        """
        try:
            results = list(self.search_adapter.search(query) or [])
        except Exception as e:
            logger.warning(f"Search failed for query '{query}': {e}")
            return []

        candidates = [r for r in results if isinstance(r, Candidate)]
        if len(candidates) != len(results):
            logger.debug(
                f"Dropped {len(results) - len(candidates)} malformed results "
                f"for query '{query}'"
            )
        return candidates
