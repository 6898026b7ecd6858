"""
Data models for YouTube Music search results.

A Candidate is the engine's read-only view of one search result. It keeps
only the fields the scorer looks at, so any search backend can produce
candidates, not just ytmusicapi.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class CandidateKind(str, Enum):
    """Kind of a search result as reported by YouTube Music."""

    SONG = "song"
    VIDEO = "video"
    OTHER = "other"

    @classmethod
    def from_result_type(cls, result_type: str | None) -> "CandidateKind":
        """
        Map a ytmusicapi 'resultType' to a CandidateKind.

        Unknown or missing result types map to OTHER.
        """
        try:
            return cls((result_type or "").lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class Candidate:
    """
    Immutable representation of a YouTube Music search result.

    Attributes:
        id: YouTube video ID (11-character string).
            Example: "4NRXx6U8ABQ"

        title: Video/song title as it appears on YouTube.
               Example: "Blinding Lights"

        contributors: Artist or channel names credited on the result.
                      Example: ("The Weeknd",)

        kind: SONG for YouTube Music catalog songs, VIDEO for videos,
              OTHER for anything else.

        is_official: Whether the result comes from an official source
                     (catalog song or verified/official artist channel).

    Class Methods:
        from_ytmusic_result: Create from a ytmusicapi search result.
    """

    id: str
    title: str
    contributors: tuple[str, ...] = ()
    kind: CandidateKind = CandidateKind.OTHER
    is_official: bool = False

    @classmethod
    def from_ytmusic_result(cls, result: dict[str, Any]) -> "Candidate":
        """
        Create a Candidate from a ytmusicapi search result.

        Args:
            result: Dictionary from ytmusicapi.YTMusic.search() response.

        Returns:
            Candidate populated with data from the API response.

        Raises:
            ValueError: If the result has no videoId.

        Behavior:
            1. Extract videoId and title
            2. Collect artist names ('artists' list of {"name": ...} dicts),
               falling back to the 'author' field some video results carry
            3. Map resultType to CandidateKind
            4. Official = catalog song, or a video whose 'videoType' marks an
               official music video (MUSIC_VIDEO_TYPE_OMV / ATV)
        """
        video_id = result.get("videoId")
        if not video_id or not isinstance(video_id, str):
            raise ValueError("search result has no videoId")

        title = result.get("title") or ""

        contributors: tuple[str, ...] = ()
        artists_data = result.get("artists")
        if artists_data and isinstance(artists_data, list):
            contributors = tuple(
                a["name"] for a in artists_data
                if isinstance(a, dict) and a.get("name")
            )
        if not contributors and isinstance(result.get("author"), str) and result["author"]:
            contributors = (result["author"],)

        kind = CandidateKind.from_result_type(result.get("resultType"))

        video_type = result.get("videoType") or ""
        is_official = kind is CandidateKind.SONG or video_type in (
            "MUSIC_VIDEO_TYPE_OMV",
            "MUSIC_VIDEO_TYPE_ATV",
        )

        return cls(
            id=video_id,
            title=title,
            contributors=contributors,
            kind=kind,
            is_official=is_official,
        )

    @property
    def url(self) -> str:
        """YouTube Music watch URL for this result."""
        return f"https://music.youtube.com/watch?v={self.id}"
