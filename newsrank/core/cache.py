"""
Snapshot cache for rows read from the article store.
"""
import json
import sqlite3
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, List, Optional

# Cache configuration
CACHE_DIR = Path("cache")
CACHE_DB_NAME = "store_cache.db"
CACHE_DURATION = timedelta(minutes=10)

class CacheManager:
    """
    Keeps short-lived copies of store query results to avoid re-reading the
    whole corpus on every command.
    """
    def __init__(self, directory: Optional[Path] = None, duration: timedelta = CACHE_DURATION):
        self.directory = Path(directory) if directory else CACHE_DIR
        self.db_path = self.directory / CACHE_DB_NAME
        self.duration = duration
        self._init_cache_dir()
        self._init_db()

    def _init_cache_dir(self):
        """Initialize the cache directory."""
        self.directory.mkdir(parents=True, exist_ok=True)

    def _init_db(self):
        """Initialize the SQLite database for caching."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS snapshots (
                    key TEXT PRIMARY KEY,
                    rows TEXT,
                    timestamp TEXT
                )
            """)

    def get(self, key: str) -> Optional[List[Any]]:
        """
        Get cached rows if they exist and are fresh.

        Args:
            key: Cache key describing the query

        Returns:
            List of rows if found and fresh, None otherwise
        """
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                "SELECT rows, timestamp FROM snapshots WHERE key = ?",
                (key,)
            )
            result = cursor.fetchone()

            if result:
                rows, timestamp = result
                cache_time = datetime.fromisoformat(timestamp)
                if datetime.now() - cache_time < self.duration:
                    return json.loads(rows)
                # Clean up expired cache entry
                conn.execute("DELETE FROM snapshots WHERE key = ?", (key,))
                conn.commit()
            return None

    def set(self, key: str, rows: List[Any]):
        """
        Cache query rows.

        Args:
            key: Cache key describing the query
            rows: JSON-serialisable rows
        """
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO snapshots (key, rows, timestamp)
                VALUES (?, ?, ?)
                """,
                (key, json.dumps(rows), datetime.now().isoformat())
            )

    def clear(self):
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM snapshots")
