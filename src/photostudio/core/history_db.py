"""SQLite record store for generation history."""

import logging
import sqlite3
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .errors import PersistenceError

logger = logging.getLogger(__name__)

# Matches SQLite's CURRENT_TIMESTAMP format so explicit and defaulted
# timestamps sort together.
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_COLUMNS = (
    "id",
    "name",
    "dealer",
    "showroom",
    "image_front",
    "image_side",
    "image_full",
    "background_type",
    "created_at",
)


@dataclass
class HistoryRecord:
    """One persisted generation event.

    Field names match the ``history`` table columns and the JSON wire format.
    """

    id: int
    name: str
    dealer: str
    showroom: str
    image_front: str | None
    image_side: str | None
    image_full: str | None
    background_type: str | None
    created_at: str

    def to_dict(self) -> dict:
        """Return the record as a JSON-serialisable dictionary."""
        return asdict(self)

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "HistoryRecord":
        """Build a record from a ``history`` table row."""
        return cls(**{column: row[column] for column in _COLUMNS})


class HistoryDB:
    """Manage the generation history table using SQLite.

    Each public method opens its own connection and runs a single statement;
    no transaction spans two calls.  Failures of the underlying engine are
    logged and re-raised as :class:`PersistenceError`.
    """

    def __init__(self, db_path: Path):
        """Initialize the history database.

        Args:
            db_path: Path to SQLite database file

        Raises:
            PersistenceError: If the schema cannot be created
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize_db()
        logger.info(f"Initialized history database at {self.db_path}")

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _initialize_db(self) -> None:
        """Create database schema if it doesn't exist."""
        conn = None
        try:
            conn = self._connect()
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS history (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    dealer TEXT NOT NULL,
                    showroom TEXT NOT NULL,
                    image_front TEXT,
                    image_side TEXT,
                    image_full TEXT,
                    background_type TEXT,
                    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
                )
                """)

            # Index for the newest-first listing
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_history_created_at
                ON history(created_at DESC)
                """)

            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error initializing history database {self.db_path}: {e}")
            raise PersistenceError(f"Cannot initialize history database: {e}") from e
        finally:
            if conn is not None:
                conn.close()

    def list_records(self) -> list[HistoryRecord]:
        """Get all history records.

        Returns:
            Records sorted by creation time (newest first); empty if none exist

        Raises:
            PersistenceError: On database failure
        """
        conn = None
        try:
            conn = self._connect()
            cursor = conn.execute("""
                SELECT * FROM history ORDER BY created_at DESC, id DESC
                """)
            return [HistoryRecord.from_row(row) for row in cursor.fetchall()]

        except sqlite3.Error as e:
            logger.error(f"Error listing history: {e}")
            raise PersistenceError(f"Failed to list history: {e}") from e
        finally:
            if conn is not None:
                conn.close()

    def create(
        self,
        name: Any,
        dealer: Any,
        showroom: Any,
        image_front: Any,
        image_side: Any,
        image_full: Any,
        background_type: Any,
        *,
        created_at: datetime | str | None = None,
    ) -> int:
        """Insert one history record.

        Values are stored as given and SQLite applies its column affinity
        (``123`` is stored as the text ``"123"``).  Missing required columns
        (name, dealer, showroom) and values SQLite cannot bind, such as lists,
        make the insert fail.

        Args:
            name: Sales representative's name
            dealer: Dealer name
            showroom: Showroom name
            image_front: Front shot payload
            image_side: 45-degree shot payload
            image_full: Full-body shot payload
            background_type: Background type used for the generation
            created_at: Explicit creation time; the store default (now) is
                used when omitted

        Returns:
            The id assigned to the new record

        Raises:
            PersistenceError: On constraint or database failure
            ValueError: If an explicit ``created_at`` string is not ISO 8601
        """
        values = [name, dealer, showroom, image_front, image_side, image_full, background_type]
        columns = "name, dealer, showroom, image_front, image_side, image_full, background_type"
        placeholders = "?, ?, ?, ?, ?, ?, ?"

        if created_at is not None:
            columns += ", created_at"
            placeholders += ", ?"
            values.append(_format_timestamp(created_at))

        conn = None
        try:
            conn = self._connect()
            cursor = conn.execute(
                f"INSERT INTO history ({columns}) VALUES ({placeholders})",
                values,
            )
            conn.commit()
            record_id = cursor.lastrowid
            logger.info(f"Saved history item {record_id} for {name} ({dealer} {showroom})")
            return record_id

        except sqlite3.Error as e:
            logger.error(f"Error saving history item for {name}: {e}")
            raise PersistenceError(f"Failed to save history: {e}") from e
        finally:
            if conn is not None:
                conn.close()

    def delete_by_id(self, record_id: int) -> bool:
        """Delete a history record.

        Args:
            record_id: Id of the record to delete

        Returns:
            True if a record was removed, False if no record had that id

        Raises:
            PersistenceError: On database failure
        """
        conn = None
        try:
            conn = self._connect()
            cursor = conn.execute("DELETE FROM history WHERE id = ?", (record_id,))
            conn.commit()

            was_deleted = cursor.rowcount > 0
            if was_deleted:
                logger.info(f"Successfully deleted history item {record_id}")
            else:
                logger.warning(f"No history item found with id {record_id}")

            return was_deleted

        except sqlite3.Error as e:
            logger.error(f"Failed to delete history item {record_id}: {e}")
            raise PersistenceError(f"Failed to delete history item {record_id}: {e}") from e
        finally:
            if conn is not None:
                conn.close()

    def count(self) -> int:
        """Get total number of history records.

        Raises:
            PersistenceError: On database failure
        """
        conn = None
        try:
            conn = self._connect()
            result = conn.execute("SELECT COUNT(*) FROM history").fetchone()
            return result[0] if result else 0

        except sqlite3.Error as e:
            logger.error(f"Error counting history: {e}")
            raise PersistenceError(f"Failed to count history: {e}") from e
        finally:
            if conn is not None:
                conn.close()


def _format_timestamp(value: datetime | str) -> str:
    """Normalise an explicit timestamp to the store's text format (UTC).

    Strings are parsed as ISO 8601, so ``2025-01-01T09:00:00+09:00`` and
    ``2025-01-01 00:00:00`` are stored identically.

    Raises:
        ValueError: If a string is not an ISO 8601 timestamp
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime(TIMESTAMP_FORMAT)
