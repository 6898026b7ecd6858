"""
Data models for track resolution results.

ScoredCandidate lives only while one track is being resolved.
ConversionResult, ConversionSummary and ConversionReport are what a
conversion hands back to its caller.
"""

from dataclasses import dataclass
from typing import Any, Iterable

from spot_converter.spotify.models import SourceTrack
from spot_converter.youtube.models import Candidate


@dataclass(frozen=True)
class ScoredCandidate:
    """A search result paired with its match score for one source track."""

    candidate: Candidate
    score: float


@dataclass(frozen=True)
class ConversionResult:
    """
    Outcome of resolving one source track.

    Attributes:
        source: The input track, unchanged.
        matched_id: YouTube video ID of the accepted candidate, or None.
        found: True exactly when matched_id is not None.
        score: Score of the accepted candidate (None when unmatched).

    Use the matched() and unmatched() constructors: they keep found and
    matched_id consistent.
    """

    source: SourceTrack
    matched_id: str | None
    found: bool
    score: float | None = None

    @classmethod
    def matched(cls, source: SourceTrack, scored: ScoredCandidate) -> "ConversionResult":
        return cls(
            source=source,
            matched_id=scored.candidate.id,
            found=True,
            score=scored.score,
        )

    @classmethod
    def unmatched(cls, source: SourceTrack) -> "ConversionResult":
        return cls(source=source, matched_id=None, found=False)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the response JSON shape."""
        return {
            "source": self.source.to_dict(),
            "matchedId": self.matched_id,
            "found": self.found,
        }


@dataclass(frozen=True)
class ConversionSummary:
    """
    Aggregate counts of one conversion.

    Attributes:
        total_tracks: Number of source tracks.
        successful_conversions: Number of results with found=True.
    """

    total_tracks: int
    successful_conversions: int

    @classmethod
    def from_results(cls, results: Iterable[ConversionResult]) -> "ConversionSummary":
        results = list(results)
        return cls(
            total_tracks=len(results),
            successful_conversions=sum(1 for r in results if r.found),
        )

    @property
    def success_rate(self) -> float:
        """Fraction of tracks found (0.0 for an empty conversion)."""
        if self.total_tracks == 0:
            return 0.0
        return self.successful_conversions / self.total_tracks

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalTracks": self.total_tracks,
            "successfulConversions": self.successful_conversions,
        }


@dataclass(frozen=True)
class ConversionReport:
    """
    Complete outcome of a conversion: per-track results plus summary.

    Attributes:
        results: One ConversionResult per source track, in input order.
        summary: Counts derived from results.
    """

    results: tuple[ConversionResult, ...]
    summary: ConversionSummary

    @classmethod
    def from_results(cls, results: Iterable[ConversionResult]) -> "ConversionReport":
        results = tuple(results)
        return cls(results=results, summary=ConversionSummary.from_results(results))

    @property
    def playlist_url(self) -> str | None:
        """
        YouTube Music radio URL seeded with the first found track.

        YouTube Music has no anonymous playlist creation, so the closest
        shareable "playlist" is the radio mix of the first match.
        None when no track was found.
        """
        for result in self.results:
            if result.matched_id:
                return (
                    f"https://music.youtube.com/watch?v={result.matched_id}"
                    f"&list=RD{result.matched_id}"
                )
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "summary": self.summary.to_dict(),
            "youtubePlaylistUrl": self.playlist_url,
        }
