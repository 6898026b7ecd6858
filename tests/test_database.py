"""Test the conversion history database"""

import sqlite3

import pytest

from spot_converter.core.database import DATABASE_VERSION, Database
from spot_converter.core.exceptions import DatabaseError
from spot_converter.matching.models import ConversionSummary


@pytest.fixture
def database(temp_dir):
    db = Database(temp_dir / "conversions.db")
    yield db
    db.close()


class TestDatabase:
    """Test Database"""

    def test_record_and_read_back(self, database):
        """Test a recorded conversion can be read back"""
        row_id = database.record_conversion(
            ConversionSummary(total_tracks=10, successful_conversions=7),
            playlist_url="https://open.spotify.com/playlist/abc",
            playlist_name="Road Trip",
            youtube_playlist_url="https://music.youtube.com/watch?v=x&list=RDx",
        )

        rows = database.get_recent_conversions()

        assert len(rows) == 1
        row = rows[0]
        assert row["id"] == row_id
        assert row["spotify_playlist_url"] == "https://open.spotify.com/playlist/abc"
        assert row["spotify_playlist_name"] == "Road Trip"
        assert row["youtube_playlist_url"] == "https://music.youtube.com/watch?v=x&list=RDx"
        assert row["track_count"] == 10
        assert row["successful_conversions"] == 7
        assert row["created_at"]

    def test_optional_fields(self, database):
        """Test conversions of plain track lists have no playlist info"""
        database.record_conversion(ConversionSummary(total_tracks=1, successful_conversions=0))

        row = database.get_recent_conversions()[0]
        assert row["spotify_playlist_url"] is None
        assert row["spotify_playlist_name"] is None
        assert row["youtube_playlist_url"] is None

    def test_recent_newest_first(self, database):
        """Test recent conversions are ordered newest first and limited"""
        for total in (1, 2, 3):
            database.record_conversion(ConversionSummary(total_tracks=total, successful_conversions=0))

        rows = database.get_recent_conversions(limit=2)

        assert [r["track_count"] for r in rows] == [3, 2]

    def test_global_stats(self, database):
        """Test aggregate statistics"""
        database.record_conversion(ConversionSummary(total_tracks=10, successful_conversions=8))
        database.record_conversion(ConversionSummary(total_tracks=10, successful_conversions=4))

        stats = database.get_global_stats()

        assert stats["conversions"] == 2
        assert stats["total_tracks"] == 20
        assert stats["successful_conversions"] == 12
        assert stats["success_rate"] == 0.6

    def test_global_stats_empty(self, database):
        """Test statistics of an empty history"""
        stats = database.get_global_stats()

        assert stats["conversions"] == 0
        assert stats["total_tracks"] == 0
        assert stats["success_rate"] == 0.0

    def test_persists_across_instances(self, temp_dir):
        """Test rows survive reopening the file"""
        path = temp_dir / "conversions.db"
        first = Database(path)
        first.record_conversion(ConversionSummary(total_tracks=4, successful_conversions=4))
        first.close()

        second = Database(path)
        try:
            assert len(second.get_recent_conversions()) == 1
        finally:
            second.close()

    def test_missing_parent_directory(self, temp_dir):
        """Test a database path in a missing directory is rejected"""
        with pytest.raises(DatabaseError):
            Database(temp_dir / "missing" / "conversions.db")

    def test_version_mismatch(self, temp_dir):
        """Test an incompatible schema version is rejected"""
        path = temp_dir / "conversions.db"
        Database(path).close()

        conn = sqlite3.connect(str(path))
        conn.execute("UPDATE schema_version SET version = ?", (DATABASE_VERSION + 1,))
        conn.commit()
        conn.close()

        with pytest.raises(DatabaseError):
            Database(path)
