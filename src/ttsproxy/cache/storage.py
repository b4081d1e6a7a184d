"""SQLite response store implementation."""

import json
import sqlite3
from datetime import datetime
from pathlib import Path

from .models import CachedResponse


class CacheStore:
    """Named SQLite-backed store of responses keyed by method and URL.

    Several stores can share one database file; each only sees the rows
    saved under its own name. Entries never expire and are never removed.
    """

    def __init__(self, cache_dir: Path, name: str):
        """Initialize the store with its database in the given directory.

        Args:
            cache_dir: Directory containing the cache database
            name: Store name, e.g. "hindi-audio-cache-v1"
        """
        if not name:
            raise ValueError("Store name cannot be empty")

        self.cache_dir = cache_dir
        self.name = name

        # Create cache directory if it doesn't exist
        cache_dir.mkdir(parents=True, exist_ok=True)

        self.db_path = cache_dir / "cache.db"
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection with WAL mode for concurrency."""
        conn = sqlite3.connect(
            str(self.db_path),
            timeout=30.0,  # 30 second timeout if locked
            check_same_thread=False,
        )
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA busy_timeout=30000")
        conn.execute("PRAGMA synchronous=NORMAL")
        return conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        conn = self._get_connection()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS responses (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    store TEXT NOT NULL,
                    method TEXT NOT NULL,
                    url TEXT NOT NULL,
                    status_code INTEGER NOT NULL,
                    headers TEXT NOT NULL,
                    body BLOB NOT NULL,
                    timestamp TEXT NOT NULL,
                    UNIQUE(store, method, url)
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def match(self, method: str, url: str) -> CachedResponse | None:
        """Look up the stored response for an exact request.

        Args:
            method: HTTP method of the request
            url: Full request URL; compared byte for byte

        Returns:
            Stored response if present, None otherwise
        """
        conn = self._get_connection()
        try:
            row = conn.execute(
                """
                SELECT method, url, status_code, headers, body, timestamp
                FROM responses
                WHERE store = ? AND method = ? AND url = ?
            """,
                (self.name, method, url),
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            return None

        return CachedResponse(
            method=row["method"],
            url=row["url"],
            status_code=row["status_code"],
            headers=[tuple(pair) for pair in json.loads(row["headers"])],
            body=bytes(row["body"]),
            timestamp=datetime.fromisoformat(row["timestamp"]),
        )

    def put(self, entry: CachedResponse) -> None:
        """Store a response under its request key.

        A second write for the same key replaces the first (concurrent
        misses on one key both write; the last one wins).

        Args:
            entry: Response copy to store
        """
        conn = self._get_connection()
        try:
            conn.execute(
                """
                INSERT OR REPLACE INTO responses
                    (store, method, url, status_code, headers, body, timestamp)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
                (
                    self.name,
                    entry.method,
                    entry.url,
                    entry.status_code,
                    json.dumps(entry.headers),
                    entry.body,
                    entry.timestamp.isoformat(),
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def keys(self) -> list[tuple[str, str]]:
        """Return the (method, url) pairs held by this store, oldest first."""
        conn = self._get_connection()
        try:
            rows = conn.execute(
                "SELECT method, url FROM responses WHERE store = ? ORDER BY id",
                (self.name,),
            ).fetchall()
        finally:
            conn.close()
        return [(row["method"], row["url"]) for row in rows]
