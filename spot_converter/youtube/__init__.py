"""
YouTube Music module for spot-converter.

    - client: YTMusicSearchAdapter, text search via ytmusicapi
    - models: Candidate and CandidateKind
"""

from spot_converter.youtube.client import YTMusicSearchAdapter
from spot_converter.youtube.models import Candidate, CandidateKind

__all__ = [
    "YTMusicSearchAdapter",
    "Candidate",
    "CandidateKind",
]
