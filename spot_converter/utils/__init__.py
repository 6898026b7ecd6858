"""
Utility functions for spot-converter.

    - Spotify playlist URL/URI parsing
    - Path helpers

Usage:
    from spot_converter.utils import extract_playlist_id, ensure_directory
"""

import re
from pathlib import Path


# https://open.spotify.com/playlist/ID, optionally with a locale segment
# (open.spotify.com/intl-it/playlist/ID), query string or trailing slash
_PLAYLIST_URL_RE = re.compile(r"spotify\.com/(?:[\w-]+/)?playlist/([A-Za-z0-9]+)/?(?:[?#].*)?$")
_PLAYLIST_URI_RE = re.compile(r"^spotify:playlist:([A-Za-z0-9]+)$")


def ensure_directory(path: Path) -> Path:
    """
    Ensure a directory exists, creating it and its parents if necessary.

    Returns:
        The same path (for chaining).

    Raises:
        OSError: If the directory cannot be created.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def extract_playlist_id(url: str) -> str:
    """
    Extract the playlist ID from a Spotify playlist URL or URI.

    Raises:
        ValueError: If the value is not a Spotify playlist URL/URI or
                    carries no playlist ID.

    Examples:
        extract_playlist_id("https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M?si=x")
        # "37i9dQZF1DXcBWIGoYBM5M"

        extract_playlist_id("spotify:playlist:37i9dQZF1DXcBWIGoYBM5M")
        # "37i9dQZF1DXcBWIGoYBM5M"
    """
    value = (url or "").strip()

    match = _PLAYLIST_URI_RE.match(value) or _PLAYLIST_URL_RE.search(value)
    if match is None:
        raise ValueError(f"Not a Spotify playlist URL: {url}")
    return match.group(1)


__all__ = [
    "ensure_directory",
    "extract_playlist_id",
]
