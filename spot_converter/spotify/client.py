"""
Spotify API client singleton for spot-converter.

SpotifyClient wraps spotipy with the client credentials flow, which is
enough to read public playlists. It is a singleton: initialize it once
with init(), then call SpotifyClient() anywhere to get the same instance.

Usage:
    from spot_converter.spotify.client import SpotifyClient

    SpotifyClient.init(client_id="...", client_secret="...")

    client = SpotifyClient()
    playlist = client.playlist("https://open.spotify.com/playlist/...")
"""

from typing import Any

import spotipy
from spotipy.oauth2 import SpotifyClientCredentials

from spot_converter.core.exceptions import SpotifyError


# Spotify caps playlist item pages at 100
PAGE_SIZE = 100


class SpotifyClientMeta(type):
    """
    Metaclass implementing the singleton pattern for SpotifyClient.

    SpotifyClient() raises until init() has been called; init() may only
    be called once (until reset()).
    """

    _instance: "SpotifyClient | None" = None
    _initialized: bool = False

    def __call__(cls) -> "SpotifyClient":
        if cls._instance is None:
            raise SpotifyError(
                "SpotifyClient not initialized. Call SpotifyClient.init("
                "client_id, client_secret) first.",
                is_auth_error=True
            )
        return cls._instance

    def init(cls, client_id: str, client_secret: str) -> "SpotifyClient":
        """
        Initialize the SpotifyClient singleton.

        Args:
            client_id: Spotify application client ID.
            client_secret: Spotify application client secret.

        Returns:
            The initialized SpotifyClient instance.

        Raises:
            SpotifyError: If init() was already called, or if spotipy
                          cannot be set up with these credentials.
        """
        if cls._initialized:
            raise SpotifyError(
                "SpotifyClient.init() has already been called. "
                "Use SpotifyClient() to get the existing instance.",
                is_auth_error=True
            )

        try:
            auth_manager = SpotifyClientCredentials(
                client_id=client_id,
                client_secret=client_secret
            )
            spotify_instance = spotipy.Spotify(auth_manager=auth_manager)
        except Exception as e:
            raise SpotifyError(
                f"Failed to initialize Spotify client: {e}",
                details={"original_error": str(e)},
                is_auth_error=True
            ) from e

        instance = super().__call__(spotify_instance)
        cls._instance = instance
        cls._initialized = True
        return instance

    def is_initialized(cls) -> bool:
        return cls._initialized

    def reset(cls) -> None:
        """Reset the singleton state. Only meant for tests."""
        cls._instance = None
        cls._initialized = False


def _translate_error(
    error: spotipy.SpotifyException,
    action: str,
    playlist_id_or_url: str
) -> SpotifyError:
    """Map a spotipy exception to SpotifyError, flagging rate limits and auth failures."""
    details = {
        "playlist_url": playlist_id_or_url,
        "http_status": error.http_status,
    }

    if error.http_status == 429:
        return SpotifyError(
            f"Rate limited while {action}: {playlist_id_or_url}",
            details=details,
            is_rate_limit=True
        )
    if error.http_status == 404:
        return SpotifyError(f"Playlist not found: {playlist_id_or_url}", details=details)
    if error.http_status in (401, 403):
        return SpotifyError(
            f"Spotify rejected the credentials while {action}",
            details=details,
            is_auth_error=True
        )
    details["original_error"] = str(error)
    return SpotifyError(f"Failed {action}: {error}", details=details)


class SpotifyClient(metaclass=SpotifyClientMeta):
    """
    Singleton Spotify API client.

    Attributes:
        _spotify: The underlying spotipy.Spotify instance.

    Rate Limiting:
        spotipy retries 429 responses itself; a SpotifyError with
        is_rate_limit=True means its retries were exhausted.
    """

    def __init__(self, spotify_instance: spotipy.Spotify) -> None:
        self._spotify = spotify_instance

    def playlist(self, playlist_id_or_url: str) -> dict[str, Any]:
        """
        Get playlist metadata (no track list).

        Raises:
            SpotifyError: If the playlist is missing, private, or the
                          request fails.
        """
        try:
            result = self._spotify.playlist(
                playlist_id_or_url,
                fields="id,name,external_urls,tracks.total"
            )
        except spotipy.SpotifyException as e:
            raise _translate_error(e, "fetching playlist", playlist_id_or_url) from e

        if result is None:
            raise SpotifyError(
                f"Playlist not found: {playlist_id_or_url}",
                details={"playlist_url": playlist_id_or_url}
            )
        return result

    def playlist_items(
        self,
        playlist_id_or_url: str,
        limit: int = PAGE_SIZE,
        offset: int = 0
    ) -> dict[str, Any]:
        """
        Get one page of playlist items.

        Returns:
            Spotify paging object: 'items', 'total' and 'next' (None on
            the last page).
        """
        try:
            result = self._spotify.playlist_items(
                playlist_id_or_url,
                limit=min(limit, PAGE_SIZE),
                offset=offset,
                additional_types=["track"]
            )
        except spotipy.SpotifyException as e:
            raise _translate_error(e, "fetching playlist items", playlist_id_or_url) from e

        if result is None:
            raise SpotifyError(
                f"Failed to fetch playlist items: {playlist_id_or_url}",
                details={"playlist_url": playlist_id_or_url}
            )
        return result

    def playlist_all_items(self, playlist_id_or_url: str) -> list[dict[str, Any]]:
        """
        Get every item of a playlist, following pagination.

        Items are returned in playlist order. Entries whose 'track' is
        None (removed tracks) are kept; filtering is up to the caller.
        """
        items: list[dict[str, Any]] = []
        offset = 0

        while True:
            page = self.playlist_items(playlist_id_or_url, offset=offset)
            page_items = page.get("items") or []
            items.extend(page_items)

            if not page.get("next") or not page_items:
                break
            offset += len(page_items)

        return items
