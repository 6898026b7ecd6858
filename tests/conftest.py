"""Test configuration and fixtures"""

import threading

import pytest

from spot_converter.core.config import ScoringWeights
from spot_converter.spotify.models import SourceTrack
from spot_converter.youtube.models import Candidate, CandidateKind


class FakeSearchAdapter:
    """
    In-memory search adapter.

    responses maps a query to a list of candidates or to an exception
    instance (raised when that query is searched). Unknown queries
    return no results. A callable default can decide for any query.
    """

    def __init__(self, responses=None, default=None):
        self.responses = dict(responses or {})
        self.default = default
        self.queries = []
        self.ready_calls = 0
        self._lock = threading.Lock()

    def ensure_ready(self):
        self.ready_calls += 1

    def search(self, query):
        with self._lock:
            self.queries.append(query)

        if query in self.responses:
            response = self.responses[query]
        elif self.default is not None:
            response = self.default(query)
        else:
            response = []

        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def temp_dir(tmp_path):
    """Temporary directory for tests"""
    return tmp_path


@pytest.fixture
def weights():
    """Default scoring weights"""
    return ScoringWeights()


@pytest.fixture
def blinding_lights():
    """The track used across end-to-end scenarios"""
    return SourceTrack(name="Blinding Lights", artists=("The Weeknd",))


@pytest.fixture
def official_song():
    """Official catalog song matching blinding_lights exactly"""
    return Candidate(
        id="abc123",
        title="Blinding Lights",
        contributors=("The Weeknd",),
        kind=CandidateKind.SONG,
        is_official=True,
    )


@pytest.fixture
def unrelated_video():
    """Video with nothing in common with blinding_lights"""
    return Candidate(
        id="zzz999",
        title="Cooking Pasta at Home",
        contributors=("Kitchen Channel",),
        kind=CandidateKind.VIDEO,
        is_official=False,
    )


@pytest.fixture
def fake_adapter():
    """Factory for FakeSearchAdapter instances"""
    return FakeSearchAdapter


@pytest.fixture
def sample_playlist_item():
    """One item of a Spotify playlist_items response"""
    return {
        "added_at": "2023-01-01T00:00:00Z",
        "is_local": False,
        "track": {
            "id": "0VjIjW4GlUZAMYd2vXMi3b",
            "name": "Blinding Lights",
            "type": "track",
            "is_local": False,
            "artists": [
                {"id": "1Xyo4u8uXC1ZmMpatF05PJ", "name": "The Weeknd"},
            ],
            "duration_ms": 200040,
        },
    }
