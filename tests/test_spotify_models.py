"""Test Spotify data models"""

import pytest

from spot_converter.core.exceptions import InvalidInputError
from spot_converter.spotify.models import SourcePlaylist, SourceTrack


class TestSourceTrack:
    """Test SourceTrack"""

    def test_from_spotify_api(self, sample_playlist_item):
        """Test creation from a Spotify track object"""
        track = SourceTrack.from_spotify_api(sample_playlist_item["track"])

        assert track.name == "Blinding Lights"
        assert track.artists == ("The Weeknd",)
        assert track.primary_artist == "The Weeknd"

    def test_from_spotify_api_several_artists(self):
        """Test artist credit order is kept"""
        track = SourceTrack.from_spotify_api({
            "name": "Tum Hi Ho",
            "artists": [{"name": "Mithoon"}, {"name": "Arijit Singh"}, {"name": ""}],
        })

        assert track.artists == ("Mithoon", "Arijit Singh")
        assert track.primary_artist == "Mithoon"

    def test_from_dict(self):
        """Test creation from a request item"""
        track = SourceTrack.from_dict({"name": "Song", "artists": ["A", "B"]})

        assert track == SourceTrack("Song", ("A", "B"))
        assert track.to_dict() == {"name": "Song", "artists": ["A", "B"]}

    def test_from_dict_without_artists(self):
        """Test a missing artist list means no credits"""
        track = SourceTrack.from_dict({"name": "Song"})

        assert track.artists == ()
        assert track.primary_artist == ""

    @pytest.mark.parametrize("item", [
        "Song",
        None,
        {"artists": ["A"]},
        {"name": 42, "artists": []},
        {"name": "Song", "artists": "A"},
        {"name": "Song", "artists": ["A", 7]},
    ])
    def test_from_dict_invalid(self, item):
        """Test malformed request items"""
        with pytest.raises(InvalidInputError):
            SourceTrack.from_dict(item, index=3)

    def test_error_names_the_item(self):
        """Test errors point at the offending item"""
        with pytest.raises(InvalidInputError) as exc_info:
            SourceTrack.from_dict({"name": None}, index=2)
        assert exc_info.value.details["field"] == "tracks[2].name"


class TestSourcePlaylist:
    """Test SourcePlaylist"""

    def test_from_spotify_api(self):
        """Test creation from playlist metadata"""
        tracks = [SourceTrack("One", ("A",)), SourceTrack("Two", ("B",))]
        playlist = SourcePlaylist.from_spotify_api(
            {
                "id": "37i9dQZF1DXcBWIGoYBM5M",
                "name": "Today's Top Hits",
                "external_urls": {"spotify": "https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M"},
            },
            tracks,
        )

        assert playlist.spotify_id == "37i9dQZF1DXcBWIGoYBM5M"
        assert playlist.name == "Today's Top Hits"
        assert playlist.url == "https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M"
        assert playlist.tracks == tuple(tracks)
        assert playlist.track_count == 2

    def test_url_fallback(self):
        """Test the URL is built from the ID when missing"""
        playlist = SourcePlaylist.from_spotify_api({"id": "abc"}, [])

        assert playlist.url == "https://open.spotify.com/playlist/abc"
        assert playlist.name == "Unknown Playlist"
