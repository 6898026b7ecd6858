"""
Data models for Spotify entities.

This module defines immutable dataclasses for the source side of a
conversion: the tracks to resolve and the playlist they come from.

Design Decisions:
    - All dataclasses are frozen (immutable) to prevent accidental modification
    - A track carries only what matching needs: its title and artist credits
    - A track's identity is its position in the source list, not a Spotify ID,
      so tracks submitted as plain JSON work the same as fetched ones

Usage:
    from spot_converter.spotify.models import SourceTrack, SourcePlaylist

    track = SourceTrack(name="Blinding Lights", artists=("The Weeknd",))
    track.primary_artist  # "The Weeknd"
"""

from dataclasses import dataclass
from typing import Any

from spot_converter.core.exceptions import InvalidInputError


@dataclass(frozen=True)
class SourceTrack:
    """
    Immutable representation of a track to be converted.

    Attributes:
        name: Track title as it appears on Spotify, decorations included.
              Example: "Tum Hi Ho (From \"Aashiqui 2\")"

        artists: Artist names in credit order; the first is the primary artist.
                 Example: ("Mithoon", "Arijit Singh")

    Class Methods:
        from_spotify_api: Create from a Spotify track object.
        from_dict: Create from a conversion request item.
    """

    name: str
    artists: tuple[str, ...] = ()

    @classmethod
    def from_spotify_api(cls, track_data: dict[str, Any]) -> "SourceTrack":
        """
        Create a SourceTrack from a Spotify API track object.

        Args:
            track_data: The 'track' field of a playlist item, or the
                        response of spotify.track().

        Returns:
            SourceTrack with the track name and every named artist.
        """
        artists = tuple(
            a["name"] for a in track_data.get("artists") or []
            if isinstance(a, dict) and a.get("name")
        )
        return cls(name=track_data.get("name") or "", artists=artists)

    @classmethod
    def from_dict(cls, data: Any, index: int | None = None) -> "SourceTrack":
        """
        Create a SourceTrack from one item of a conversion request.

        Args:
            data: Dict with 'name' (string) and optional 'artists'
                  (list of strings).
            index: Position of the item in the request, for error messages.

        Returns:
            SourceTrack built from the item.

        Raises:
            InvalidInputError: If the item is not a dict, 'name' is not a
                               string, or 'artists' is not a list of strings.

        Example:
            SourceTrack.from_dict({"name": "Song", "artists": ["Artist"]})
        """
        where = f"tracks[{index}]" if index is not None else "track"

        if not isinstance(data, dict):
            raise InvalidInputError(
                f"{where} must be an object",
                details={"field": where}
            )

        name = data.get("name")
        if not isinstance(name, str):
            raise InvalidInputError(
                f"{where}.name must be a string",
                details={"field": f"{where}.name"}
            )

        artists = data.get("artists")
        if artists is None:
            artists = []
        if not isinstance(artists, list) or not all(isinstance(a, str) for a in artists):
            raise InvalidInputError(
                f"{where}.artists must be an array of strings",
                details={"field": f"{where}.artists"}
            )

        return cls(name=name, artists=tuple(artists))

    @property
    def primary_artist(self) -> str:
        """First credited artist, or an empty string when uncredited."""
        return self.artists[0] if self.artists else ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the request/response JSON shape."""
        return {"name": self.name, "artists": list(self.artists)}


@dataclass(frozen=True)
class SourcePlaylist:
    """
    Immutable representation of a Spotify playlist to convert.

    Attributes:
        spotify_id: Unique Spotify playlist ID.
                    Example: "37i9dQZF1DXcBWIGoYBM5M"
        name: Playlist name as it appears on Spotify.
        url: Full Spotify URL for the playlist.
        tracks: Tracks in playlist order. Local files and removed tracks
                are not included.
    """

    spotify_id: str
    name: str
    url: str
    tracks: tuple[SourceTrack, ...]

    @classmethod
    def from_spotify_api(
        cls,
        playlist_data: dict[str, Any],
        tracks: list[SourceTrack]
    ) -> "SourcePlaylist":
        """Create a SourcePlaylist from spotify.playlist() data and parsed tracks."""
        spotify_id = playlist_data.get("id", "")
        url = playlist_data.get("external_urls", {}).get(
            "spotify",
            f"https://open.spotify.com/playlist/{spotify_id}"
        )
        return cls(
            spotify_id=spotify_id,
            name=playlist_data.get("name", "Unknown Playlist"),
            url=url,
            tracks=tuple(tracks),
        )

    @property
    def track_count(self) -> int:
        return len(self.tracks)
