"""Test YouTube Music models and search adapter"""

import threading
from unittest.mock import patch

import pytest

from spot_converter.core.exceptions import YouTubeError
from spot_converter.core.config import YouTubeConfig
from spot_converter.youtube.client import YTMusicSearchAdapter
from spot_converter.youtube.models import Candidate, CandidateKind


def song_result(video_id, title="Blinding Lights", artist="The Weeknd"):
    return {
        "resultType": "song",
        "videoId": video_id,
        "title": title,
        "artists": [{"name": artist, "id": "UC123"}],
        "album": {"name": "After Hours", "id": "MPRE1"},
        "duration": "3:20",
    }


def video_result(video_id, title="Blinding Lights (Official Video)", video_type="MUSIC_VIDEO_TYPE_UGC"):
    return {
        "resultType": "video",
        "videoId": video_id,
        "title": title,
        "artists": [{"name": "TheWeekndVEVO", "id": "UC456"}],
        "videoType": video_type,
        "views": "1B",
    }


class TestCandidate:
    """Test Candidate.from_ytmusic_result()"""

    def test_song(self):
        """Test catalog songs are official songs"""
        candidate = Candidate.from_ytmusic_result(song_result("abc123"))

        assert candidate.id == "abc123"
        assert candidate.title == "Blinding Lights"
        assert candidate.contributors == ("The Weeknd",)
        assert candidate.kind == CandidateKind.SONG
        assert candidate.is_official is True
        assert candidate.url == "https://music.youtube.com/watch?v=abc123"

    def test_user_video(self):
        """Test uploads by users are not official"""
        candidate = Candidate.from_ytmusic_result(video_result("vid1"))

        assert candidate.kind == CandidateKind.VIDEO
        assert candidate.is_official is False

    def test_official_music_video(self):
        """Test official music videos are official"""
        candidate = Candidate.from_ytmusic_result(
            video_result("vid2", video_type="MUSIC_VIDEO_TYPE_OMV")
        )
        assert candidate.is_official is True

    def test_author_fallback(self):
        """Test contributors fall back to the author field"""
        candidate = Candidate.from_ytmusic_result({
            "resultType": "video",
            "videoId": "vid3",
            "title": "Some Cover",
            "author": "Cover Channel",
        })
        assert candidate.contributors == ("Cover Channel",)

    def test_unknown_result_type(self):
        """Test unknown result types map to OTHER"""
        candidate = Candidate.from_ytmusic_result({"videoId": "x", "resultType": "episode"})

        assert candidate.kind == CandidateKind.OTHER
        assert candidate.title == ""
        assert candidate.contributors == ()

    def test_missing_video_id(self):
        """Test results without a video ID are rejected"""
        with pytest.raises(ValueError):
            Candidate.from_ytmusic_result({"resultType": "album", "title": "After Hours"})


class TestYTMusicSearchAdapter:
    """Test YTMusicSearchAdapter"""

    @patch("spot_converter.youtube.client.YTMusic")
    def test_merges_filters_in_order(self, mock_ytmusic):
        """Test songs come before videos and duplicates are dropped"""
        client = mock_ytmusic.return_value
        client.search.side_effect = [
            [song_result("s1"), song_result("s2")],
            [video_result("v1"), video_result("s1")],
        ]

        candidates = YTMusicSearchAdapter().search("Blinding Lights The Weeknd")

        assert [c.id for c in candidates] == ["s1", "s2", "v1"]
        assert client.search.call_count == 2
        first_call, second_call = client.search.call_args_list
        assert first_call.kwargs["filter"] == "songs"
        assert second_call.kwargs["filter"] == "videos"
        assert first_call.kwargs["limit"] == 20

    @patch("spot_converter.youtube.client.YTMusic")
    def test_skips_results_without_video_id(self, mock_ytmusic):
        """Test albums and artists in the raw results are skipped"""
        mock_ytmusic.return_value.search.return_value = [
            {"resultType": "album", "browseId": "MPRE1", "title": "After Hours"},
            song_result("s1"),
        ]
        adapter = YTMusicSearchAdapter(search_filters=("songs",))

        assert [c.id for c in adapter.search("query")] == ["s1"]

    @patch("spot_converter.youtube.client.YTMusic")
    def test_none_response(self, mock_ytmusic):
        """Test a None response counts as no results"""
        mock_ytmusic.return_value.search.return_value = None

        assert YTMusicSearchAdapter().search("query") == []

    @patch("spot_converter.youtube.client.YTMusic")
    def test_search_errors_propagate(self, mock_ytmusic):
        """Test request failures are left to the caller"""
        mock_ytmusic.return_value.search.side_effect = ConnectionError("offline")

        with pytest.raises(ConnectionError):
            YTMusicSearchAdapter().search("query")

    @patch("spot_converter.youtube.client.YTMusic")
    def test_client_created_lazily_once(self, mock_ytmusic):
        """Test the client is built on first use and reused"""
        mock_ytmusic.return_value.search.return_value = []
        adapter = YTMusicSearchAdapter(language="it")

        assert mock_ytmusic.call_count == 0
        adapter.search("one")
        adapter.search("two")
        adapter.ensure_ready()

        mock_ytmusic.assert_called_once_with(language="it")

    @patch("spot_converter.youtube.client.YTMusic")
    def test_client_created_once_across_threads(self, mock_ytmusic):
        """Test concurrent first searches share one client"""
        mock_ytmusic.return_value.search.return_value = []
        adapter = YTMusicSearchAdapter()

        threads = [threading.Thread(target=adapter.search, args=(f"q{i}",)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert mock_ytmusic.call_count == 1

    @patch("spot_converter.youtube.client.YTMusic")
    def test_ensure_ready_failure(self, mock_ytmusic):
        """Test construction failures raise YouTubeError"""
        mock_ytmusic.side_effect = RuntimeError("cannot reach music.youtube.com")

        with pytest.raises(YouTubeError):
            YTMusicSearchAdapter().ensure_ready()

    def test_from_config(self):
        """Test adapter options come from YouTubeConfig"""
        adapter = YTMusicSearchAdapter.from_config(
            YouTubeConfig(language="de", search_filters=("videos",), limit=5)
        )

        assert adapter.language == "de"
        assert adapter.search_filters == ("videos",)
        assert adapter.limit == 5
