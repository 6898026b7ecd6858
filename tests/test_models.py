"""Test conversion result models"""

from spot_converter.matching.models import (
    ConversionReport,
    ConversionResult,
    ConversionSummary,
    ScoredCandidate,
)
from spot_converter.spotify.models import SourceTrack


class TestConversionResult:
    """Test ConversionResult"""

    def test_matched(self, blinding_lights, official_song):
        """Test matched results carry the candidate ID"""
        result = ConversionResult.matched(blinding_lights, ScoredCandidate(official_song, 8.9))

        assert result.found is True
        assert result.matched_id == "abc123"
        assert result.score == 8.9

    def test_unmatched(self, blinding_lights):
        """Test unmatched results have no ID"""
        result = ConversionResult.unmatched(blinding_lights)

        assert result.found is False
        assert result.matched_id is None
        assert result.to_dict() == {
            "source": {"name": "Blinding Lights", "artists": ["The Weeknd"]},
            "matchedId": None,
            "found": False,
        }


class TestConversionReport:
    """Test ConversionSummary and ConversionReport"""

    def test_summary_counts(self, blinding_lights, official_song):
        """Test the summary counts found results"""
        results = [
            ConversionResult.matched(blinding_lights, ScoredCandidate(official_song, 8.9)),
            ConversionResult.unmatched(SourceTrack("Other")),
        ]

        summary = ConversionSummary.from_results(results)

        assert summary.total_tracks == 2
        assert summary.successful_conversions == 1
        assert summary.success_rate == 0.5

    def test_empty_summary(self):
        """Test an empty conversion"""
        summary = ConversionSummary.from_results([])

        assert summary.success_rate == 0.0
        assert summary.to_dict() == {"totalTracks": 0, "successfulConversions": 0}

    def test_playlist_url_uses_first_found(self, blinding_lights, official_song):
        """Test the radio URL is seeded by the first found track"""
        report = ConversionReport.from_results([
            ConversionResult.unmatched(SourceTrack("Other")),
            ConversionResult.matched(blinding_lights, ScoredCandidate(official_song, 8.9)),
        ])

        assert report.playlist_url == "https://music.youtube.com/watch?v=abc123&list=RDabc123"

    def test_playlist_url_without_matches(self):
        """Test no radio URL when nothing was found"""
        report = ConversionReport.from_results([ConversionResult.unmatched(SourceTrack("Other"))])

        assert report.playlist_url is None
        assert report.to_dict()["youtubePlaylistUrl"] is None
