"""Test search query generation"""

from spot_converter.matching.queries import generate_queries


class TestGenerateQueries:
    """Test generate_queries()"""

    def test_default_templates_in_order(self):
        """Test the default query list"""
        assert generate_queries("Blinding Lights", "The Weeknd") == [
            "Blinding Lights The Weeknd",
            "Blinding Lights The Weeknd official audio",
            "Blinding Lights The Weeknd lyrics",
            "Blinding Lights",
        ]

    def test_first_query_is_title_and_artist(self):
        """Test the first query is always '{title} {artist}'"""
        queries = generate_queries("Tum Hi Ho", "Arijit Singh")
        assert queries[0] == "Tum Hi Ho Arijit Singh"

    def test_missing_artist(self):
        """Test a track without artists still produces title queries"""
        queries = generate_queries("Blinding Lights", "")
        assert queries[0] == "Blinding Lights"
        assert "Blinding Lights official audio" in queries
        # "{title} {artist}" and "{title}" collapse into one query
        assert len(queries) == len(set(queries))

    def test_falls_back_to_original_title(self):
        """Test a title cleaned to nothing falls back to the original"""
        queries = generate_queries("", "Artist", original_title="[Intro]")
        assert queries[0] == "[Intro] Artist"

    def test_artist_only(self):
        """Test title-only templates are skipped without a title"""
        queries = generate_queries("", "The Weeknd")
        assert queries[0] == "The Weeknd"
        assert "" not in queries
        assert queries == [
            "The Weeknd",
            "The Weeknd official audio",
            "The Weeknd lyrics",
        ]

    def test_nothing_to_search(self):
        """Test empty title and artist produce no queries"""
        assert generate_queries("", "") == []
        assert generate_queries("   ", "  ", original_title=" ") == []

    def test_custom_templates(self):
        """Test custom templates and whitespace collapsing"""
        queries = generate_queries(
            "Song", "Artist",
            templates=("{title} {artist}", "{artist}   -   {title}"),
        )
        assert queries == ["Song Artist", "Artist - Song"]
