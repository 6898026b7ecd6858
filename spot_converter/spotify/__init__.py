"""
Spotify module for spot-converter.

    - client: SpotifyClient singleton wrapping spotipy
    - fetcher: fetch_playlist(), playlist URL to SourcePlaylist
    - models: SourceTrack and SourcePlaylist
"""

from spot_converter.spotify.client import SpotifyClient
from spot_converter.spotify.fetcher import fetch_playlist
from spot_converter.spotify.models import SourcePlaylist, SourceTrack

__all__ = [
    "SpotifyClient",
    "fetch_playlist",
    "SourcePlaylist",
    "SourceTrack",
]
