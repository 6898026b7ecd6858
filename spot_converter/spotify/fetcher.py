"""
Spotify playlist fetcher for spot-converter.

Workflow:
    1. Validate the playlist URL and extract its ID
    2. Fetch playlist metadata (name, canonical URL)
    3. Fetch every playlist item, following pagination
    4. Drop items that cannot be converted (removed tracks, local files,
       podcast episodes)
    5. Convert the rest to SourceTrack objects, keeping playlist order

Requires SpotifyClient.init() to have been called.

Usage:
    playlist = fetch_playlist("https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M")
    report = orchestrator.convert(playlist.tracks)
"""

from typing import Any

from spot_converter.core.exceptions import InvalidInputError, SpotifyError
from spot_converter.core.logger import get_logger
from spot_converter.spotify.client import SpotifyClient
from spot_converter.spotify.models import SourcePlaylist, SourceTrack
from spot_converter.utils import extract_playlist_id


logger = get_logger(__name__)


def _is_valid_track(item: dict[str, Any] | None) -> bool:
    """
    Whether a playlist item holds a convertible track.

    Invalid items:
        - None, or an item whose 'track' is None (removed from Spotify)
        - Local files (is_local = True)
        - Podcast episodes (type != 'track')
    """
    if item is None or not isinstance(item, dict):
        return False

    track = item.get("track")
    if not isinstance(track, dict):
        return False

    if item.get("is_local") or track.get("is_local"):
        return False

    return track.get("type", "track") == "track"


def fetch_playlist(playlist_url: str) -> SourcePlaylist:
    """
    Fetch a Spotify playlist and its convertible tracks.

    Args:
        playlist_url: Spotify playlist URL or URI.

    Returns:
        SourcePlaylist with tracks in playlist order.

    Raises:
        InvalidInputError: If playlist_url is not a Spotify playlist URL.
        SpotifyError: If the client is not initialized, the playlist is
                      missing or private, or the API request fails.
    """
    try:
        playlist_id = extract_playlist_id(playlist_url)
    except ValueError as e:
        raise InvalidInputError(
            "Invalid Spotify playlist URL",
            details={"url": playlist_url}
        ) from e

    if not SpotifyClient.is_initialized():
        raise SpotifyError(
            "SpotifyClient not initialized. Call SpotifyClient.init() first.",
            is_auth_error=True
        )
    client = SpotifyClient()

    logger.info(f"Fetching playlist: {playlist_url}")
    playlist_data = client.playlist(playlist_id)
    logger.info(f"Playlist: {playlist_data.get('name', 'Unknown Playlist')}")

    items = client.playlist_all_items(playlist_id)
    logger.debug(f"Found {len(items)} playlist items")

    tracks = [
        SourceTrack.from_spotify_api(item["track"])
        for item in items
        if _is_valid_track(item)
    ]

    skipped = len(items) - len(tracks)
    if skipped > 0:
        logger.warning(f"Skipped {skipped} items (local files, removed tracks, episodes)")

    logger.info(f"Parsed {len(tracks)} tracks")
    return SourcePlaylist.from_spotify_api(playlist_data, tracks)
