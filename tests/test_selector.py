"""Test single-track match selection"""

from spot_converter.core.config import ScoringWeights
from spot_converter.matching.selector import MatchSelector
from spot_converter.spotify.models import SourceTrack
from spot_converter.youtube.models import Candidate, CandidateKind


FIRST_QUERY = "Blinding Lights The Weeknd"
SECOND_QUERY = "Blinding Lights The Weeknd official audio"


def weak_match(video_id="weak1"):
    """Right title and artist, but a plain video: scores 5.9"""
    return Candidate(video_id, "Blinding Lights", ("The Weeknd",), CandidateKind.VIDEO, False)


class TestMatchSelector:
    """Test MatchSelector"""

    def test_official_song_on_first_query(self, fake_adapter, blinding_lights, official_song):
        """Test the end-to-end single candidate scenario"""
        adapter = fake_adapter({FIRST_QUERY: [official_song]})
        selector = MatchSelector(adapter)

        assert selector.select_match(blinding_lights) == "abc123"

    def test_stops_after_good_enough_match(self, fake_adapter, blinding_lights, official_song):
        """Test no further queries once the best score is good enough"""
        adapter = fake_adapter({FIRST_QUERY: [official_song]})
        MatchSelector(adapter).select_match(blinding_lights)

        assert adapter.queries == [FIRST_QUERY]

    def test_keeps_searching_below_good_enough(self, fake_adapter, blinding_lights, official_song):
        """Test a later query can improve on an acceptable match"""
        adapter = fake_adapter({
            FIRST_QUERY: [weak_match()],
            SECOND_QUERY: [official_song],
        })
        selector = MatchSelector(adapter)

        assert selector.select_match(blinding_lights) == "abc123"
        assert adapter.queries == [FIRST_QUERY, SECOND_QUERY]

    def test_accepts_below_good_enough(self, fake_adapter, blinding_lights):
        """Test an acceptable match is kept after every query ran"""
        adapter = fake_adapter({FIRST_QUERY: [weak_match()]})
        selector = MatchSelector(adapter)

        accepted = selector.resolve(blinding_lights)

        assert accepted is not None
        assert accepted.candidate.id == "weak1"
        assert len(adapter.queries) == 4

    def test_no_results(self, fake_adapter, blinding_lights):
        """Test every query returning nothing leaves the track unmatched"""
        adapter = fake_adapter()
        selector = MatchSelector(adapter)

        assert selector.select_match(blinding_lights) is None
        assert adapter.queries == [
            "Blinding Lights The Weeknd",
            "Blinding Lights The Weeknd official audio",
            "Blinding Lights The Weeknd lyrics",
            "Blinding Lights",
        ]

    def test_below_threshold(self, fake_adapter, blinding_lights, unrelated_video):
        """Test a poor best candidate is rejected"""
        adapter = fake_adapter({FIRST_QUERY: [unrelated_video]})

        assert MatchSelector(adapter).select_match(blinding_lights) is None

    def test_threshold_from_weights(self, fake_adapter, blinding_lights, official_song):
        """Test the acceptance threshold comes from the weights"""
        adapter = fake_adapter({FIRST_QUERY: [official_song]})
        selector = MatchSelector(adapter, weights=ScoringWeights(acceptance_threshold=100.0))

        assert selector.select_match(blinding_lights) is None

    def test_tie_keeps_earliest_position(self, fake_adapter, blinding_lights, official_song):
        """Test equal scores keep the earlier result"""
        twin = Candidate("twin", "Blinding Lights", ("The Weeknd",), CandidateKind.SONG, True)
        adapter = fake_adapter({FIRST_QUERY: [official_song, twin]})

        assert MatchSelector(adapter).select_match(blinding_lights) == "abc123"

    def test_tie_keeps_earliest_query(self, fake_adapter, blinding_lights):
        """Test equal scores across queries keep the earlier query's result"""
        adapter = fake_adapter({
            FIRST_QUERY: [weak_match("first")],
            SECOND_QUERY: [weak_match("second")],
        })

        assert MatchSelector(adapter).select_match(blinding_lights) == "first"

    def test_search_errors_count_as_empty(self, fake_adapter, blinding_lights, official_song):
        """Test a failing query does not stop the next one"""
        adapter = fake_adapter({
            FIRST_QUERY: ConnectionError("network down"),
            SECOND_QUERY: [official_song],
        })

        assert MatchSelector(adapter).select_match(blinding_lights) == "abc123"

    def test_every_search_fails(self, fake_adapter, blinding_lights):
        """Test a track whose searches all fail is unmatched"""
        adapter = fake_adapter(default=lambda query: TimeoutError("timed out"))

        assert MatchSelector(adapter).select_match(blinding_lights) is None
        assert len(adapter.queries) == 4

    def test_malformed_results_dropped(self, fake_adapter, blinding_lights, official_song):
        """Test items that are not candidates are ignored"""
        adapter = fake_adapter({FIRST_QUERY: [{"videoId": "raw"}, None, official_song]})

        assert MatchSelector(adapter).select_match(blinding_lights) == "abc123"

    def test_nothing_to_search(self, fake_adapter):
        """Test a track without title and artists is never searched"""
        adapter = fake_adapter()

        assert MatchSelector(adapter).select_match(SourceTrack("")) is None
        assert adapter.queries == []

    def test_custom_templates(self, fake_adapter):
        """Test query templates come from the constructor"""
        adapter = fake_adapter()
        selector = MatchSelector(
            adapter,
            query_templates=("{title} {artist}", "{artist} {title} topic"),
        )
        selector.select_match(SourceTrack("Unknown", ("Nobody",)))

        assert adapter.queries == ["Unknown Nobody", "Nobody Unknown topic"]
