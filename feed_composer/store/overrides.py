"""SQLite persistence for user source enablement overrides."""

import sqlite3
import threading
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

import structlog

from feed_composer.store.errors import StoreConnectionError


logger = structlog.get_logger()

_SCHEMA = """
CREATE TABLE IF NOT EXISTS source_overrides (
    publisher_id TEXT PRIMARY KEY,
    enabled INTEGER NOT NULL CHECK (enabled IN (0, 1)),
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
)
"""


class SourceOverrideStore:
    """SQLite store for per-publisher enabled flags.

    Only sources the user has explicitly toggled have a row; all other
    sources keep the enabled flag they were fetched with.
    """

    def __init__(self, db_path: Path | str) -> None:
        """Initialize the store.

        Args:
            db_path: Path to SQLite database file, or ``":memory:"``.
        """
        self._db_path = str(db_path)
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()
        self._log = logger.bind(component="store", db_path=self._db_path)

    def __enter__(self) -> "SourceOverrideStore":
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def is_connected(self) -> bool:
        """Check if connected to database."""
        return self._conn is not None

    def connect(self) -> None:
        """Open the database and create the schema if needed.

        Creates parent directories for file-backed databases.
        """
        if self._conn is not None:
            return

        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)

        # Toggles arrive on the caller's thread while loads may run elsewhere
        self._conn = sqlite3.connect(self._db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute(_SCHEMA)
        self._conn.commit()
        self._log.info("database_connected")

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            self._log.info("database_closed")

    @contextmanager
    def _transaction(self) -> Generator[sqlite3.Connection, None, None]:
        if self._conn is None:
            raise StoreConnectionError
        with self._lock:
            try:
                yield self._conn
                self._conn.commit()
            except Exception:
                self._conn.rollback()
                raise

    def load_overrides(self) -> dict[str, bool]:
        """Load every persisted override.

        Returns:
            Mapping of publisher id to enabled flag.

        Raises:
            StoreConnectionError: If the store is not connected.
        """
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT publisher_id, enabled FROM source_overrides"
            ).fetchall()
        return {row["publisher_id"]: bool(row["enabled"]) for row in rows}

    def set_enabled(self, publisher_id: str, enabled: bool) -> None:
        """Persist the enabled flag for a publisher.

        Args:
            publisher_id: Publisher identifier.
            enabled: Enabled flag to store.

        Raises:
            StoreConnectionError: If the store is not connected.
        """
        with self._transaction() as conn:
            conn.execute(
                """
                INSERT INTO source_overrides (publisher_id, enabled)
                VALUES (?, ?)
                ON CONFLICT(publisher_id) DO UPDATE SET
                    enabled = excluded.enabled,
                    updated_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now')
                """,
                (publisher_id, int(enabled)),
            )
        self._log.debug("override_saved", publisher_id=publisher_id, enabled=enabled)

    def clear(self, publisher_id: str) -> None:
        """Remove the override for a publisher, restoring its fetched flag.

        Args:
            publisher_id: Publisher identifier.
        """
        with self._transaction() as conn:
            conn.execute(
                "DELETE FROM source_overrides WHERE publisher_id = ?", (publisher_id,)
            )
