"""SQLite data store for the trade journal."""

import sqlite3
from datetime import date, datetime, time
from pathlib import Path
from typing import Optional

from tradejournal.errors import StorageUnavailable
from tradejournal.models import Segment, TradeEntry

ENTRY_COLUMNS = "id, date, time, segment, pnl, stt, brokerage, other_charges, created_at"


class DataStore:
    """SQLite-based data store for trade entries."""

    REQUIRED_TABLES = [
        "trades",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.

        Raises:
            StorageUnavailable: If the database cannot be created or opened.
        """
        self.db_path = Path(db_path)
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailable(f"Cannot create {self.db_path.parent}: {e}") from e

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Cannot open {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id TEXT PRIMARY KEY,
                    date TEXT NOT NULL,
                    time TEXT NOT NULL,
                    segment TEXT NOT NULL DEFAULT 'Equity',
                    pnl REAL NOT NULL,
                    stt REAL NOT NULL DEFAULT 0,
                    brokerage REAL NOT NULL DEFAULT 0,
                    other_charges REAL NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_trades_order ON trades (date DESC, created_at DESC)"
            )

            conn.commit()
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Cannot initialize {self.db_path}: {e}") from e
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Failed to read tables: {e}") from e
        finally:
            conn.close()

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> TradeEntry:
        return TradeEntry(
            id=row["id"],
            date=date.fromisoformat(row["date"]),
            time=time.fromisoformat(row["time"]),
            segment=Segment(row["segment"]),
            pnl=row["pnl"],
            stt=row["stt"],
            brokerage=row["brokerage"],
            other_charges=row["other_charges"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    # ==================== Trades ====================

    def insert_entry(self, entry: TradeEntry) -> None:
        """Insert a trade entry.

        Args:
            entry: Entry to insert. Its id must not already exist.

        Raises:
            StorageUnavailable: If the write is rejected.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                INSERT INTO trades ({ENTRY_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.id,
                    entry.date.isoformat(),
                    entry.time.isoformat(),
                    entry.segment.value,
                    entry.pnl,
                    entry.stt,
                    entry.brokerage,
                    entry.other_charges,
                    entry.created_at.isoformat(timespec="microseconds"),
                ),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Failed to save trade: {e}") from e
        finally:
            conn.close()

    def get_entries(self) -> list[TradeEntry]:
        """Get all trade entries, newest first.

        Entries are ordered by date, then creation time, then insertion
        order, all descending.

        Returns:
            List of trade entries.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT {ENTRY_COLUMNS}
                FROM trades
                ORDER BY date DESC, created_at DESC, rowid DESC
                """
            )
            return [self._row_to_entry(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Failed to load trades: {e}") from e
        finally:
            conn.close()

    def get_entry(self, entry_id: str) -> Optional[TradeEntry]:
        """Get a trade entry by ID.

        Args:
            entry_id: Entry ID.

        Returns:
            TradeEntry if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {ENTRY_COLUMNS} FROM trades WHERE id = ?",
                (entry_id,),
            )
            row = cursor.fetchone()
            if row:
                return self._row_to_entry(row)
            return None
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Failed to load trade {entry_id}: {e}") from e
        finally:
            conn.close()

    def delete_entry(self, entry_id: str) -> bool:
        """Delete a trade entry.

        Args:
            entry_id: ID of the entry to delete.

        Returns:
            True if a row was deleted, False if the ID did not exist.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades WHERE id = ?", (entry_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Failed to delete trade {entry_id}: {e}") from e
        finally:
            conn.close()

