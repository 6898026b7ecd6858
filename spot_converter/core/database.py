"""
Thread-safe SQLite conversion history for spot-converter.

Every finished conversion leaves one summary row: which Spotify playlist
was converted, how many tracks it had and how many were found on
YouTube Music.

Schema:
    schema_version:       Single row with DATABASE_VERSION
    conversion_history:   One row per conversion (summary only, no tracks)

Usage:
    db = Database(output_dir / "conversions.db")

    row_id = db.record_conversion(
        report.summary,
        playlist_url="https://open.spotify.com/playlist/...",
        playlist_name="My Playlist",
        youtube_playlist_url=report.playlist_url,
    )
    recent = db.get_recent_conversions(limit=10)
"""

import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Generator

from spot_converter.core.exceptions import DatabaseError

if TYPE_CHECKING:
    from spot_converter.matching.models import ConversionSummary


DATABASE_VERSION = 1


_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY
);

CREATE TABLE IF NOT EXISTS conversion_history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    spotify_playlist_url TEXT,
    spotify_playlist_name TEXT,
    youtube_playlist_url TEXT,
    track_count INTEGER NOT NULL DEFAULT 0,
    successful_conversions INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_conversion_history_created ON conversion_history(created_at);
"""


class Database:
    """
    Thread-safe SQLite store for conversion summaries.

    Uses a single persistent connection with thread locking for safety.
    All public methods acquire self._lock before executing.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self._lock = threading.Lock()
        self._conn: sqlite3.Connection | None = None

        if not db_path.parent.exists():
            raise DatabaseError(
                f"Parent directory does not exist: {db_path.parent}",
                details={"path": str(db_path.parent)}
            )

        try:
            self._init_database()
        except sqlite3.Error as e:
            self.close()
            raise DatabaseError(
                f"Failed to initialize database: {e}",
                details={"path": str(db_path)}
            ) from e
        except DatabaseError:
            self.close()
            raise

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Get the persistent database connection as a context manager.

        The connection is created once and reused for all operations;
        leaving the context does not close it.
        """
        if self._conn is None:
            self._conn = sqlite3.connect(
                str(self.db_path),
                timeout=30.0,
                check_same_thread=False  # We handle thread safety with _lock
            )
            self._conn.row_factory = sqlite3.Row
        yield self._conn

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def _init_database(self) -> None:
        with self._get_connection() as conn:
            conn.executescript(_SCHEMA_SQL)

            cursor = conn.execute("SELECT version FROM schema_version LIMIT 1")
            row = cursor.fetchone()

            if row is None:
                conn.execute("INSERT INTO schema_version (version) VALUES (?)", (DATABASE_VERSION,))
            elif row[0] != DATABASE_VERSION:
                raise DatabaseError(
                    f"Database version mismatch: expected {DATABASE_VERSION}, got {row[0]}",
                    details={"expected": DATABASE_VERSION, "actual": row[0]}
                )
            conn.commit()

    def _now_iso(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    # =========================================================================
    # Conversion History
    # =========================================================================

    def record_conversion(
        self,
        summary: "ConversionSummary",
        playlist_url: str | None = None,
        playlist_name: str | None = None,
        youtube_playlist_url: str | None = None
    ) -> int:
        """
        Store the summary of one conversion.

        Args:
            summary: Track totals of the finished conversion.
            playlist_url: Source Spotify playlist URL, if known.
            playlist_name: Source playlist name, if known.
            youtube_playlist_url: Generated YouTube Music radio URL, if any.

        Returns:
            The id of the inserted row.

        Raises:
            DatabaseError: If the row cannot be written.
        """
        try:
            with self._lock:
                with self._get_connection() as conn:
                    cursor = conn.execute("""
                        INSERT INTO conversion_history (
                            spotify_playlist_url, spotify_playlist_name,
                            youtube_playlist_url, track_count,
                            successful_conversions, created_at
                        ) VALUES (?, ?, ?, ?, ?, ?)
                    """, (
                        playlist_url,
                        playlist_name,
                        youtube_playlist_url,
                        summary.total_tracks,
                        summary.successful_conversions,
                        self._now_iso(),
                    ))
                    conn.commit()
                    return cursor.lastrowid
        except sqlite3.Error as e:
            raise DatabaseError(
                f"Failed to record conversion: {e}",
                details={"path": str(self.db_path), "playlist_url": playlist_url}
            ) from e

    def get_recent_conversions(self, limit: int = 20) -> list[dict[str, Any]]:
        """Return the most recent conversion rows, newest first."""
        try:
            with self._lock:
                with self._get_connection() as conn:
                    cursor = conn.execute("""
                        SELECT id, spotify_playlist_url, spotify_playlist_name,
                               youtube_playlist_url, track_count,
                               successful_conversions, created_at
                        FROM conversion_history
                        ORDER BY created_at DESC, id DESC
                        LIMIT ?
                    """, (limit,))
                    return [dict(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise DatabaseError(
                f"Failed to read conversion history: {e}",
                details={"path": str(self.db_path)}
            ) from e

    def get_global_stats(self) -> dict[str, Any]:
        """
        Aggregate statistics over every stored conversion.

        Returns:
            Dict with 'conversions', 'total_tracks', 'successful_conversions'
            and 'success_rate' (0.0-1.0, 0.0 when nothing was converted).
        """
        try:
            with self._lock:
                with self._get_connection() as conn:
                    row = conn.execute("""
                        SELECT COUNT(*) AS conversions,
                               COALESCE(SUM(track_count), 0) AS total_tracks,
                               COALESCE(SUM(successful_conversions), 0) AS successful
                        FROM conversion_history
                    """).fetchone()
        except sqlite3.Error as e:
            raise DatabaseError(
                f"Failed to read conversion history: {e}",
                details={"path": str(self.db_path)}
            ) from e

        total_tracks = row["total_tracks"]
        successful = row["successful"]
        return {
            "conversions": row["conversions"],
            "total_tracks": total_tracks,
            "successful_conversions": successful,
            "success_rate": round(successful / total_tracks, 3) if total_tracks else 0.0,
        }
