"""SQLite journal store for JustDad."""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from pydantic import TypeAdapter

from justdad.errors import EntryNotFoundError
from justdad.journal.filters import filter_by_date_range, filter_by_tags
from justdad.models import (
    Classification,
    EmotionalState,
    IntelligentClassification,
    JournalEntry,
)

logger = logging.getLogger(__name__)

_classification_adapter = TypeAdapter(Classification)

_ENTRY_COLUMNS = (
    "id, date, date_utc, kind, emotion, classification, content, title, tags, "
    "audio_url, photo_urls, is_encrypted, created_at, updated_at"
)


def utc_sort_key(moment: datetime) -> str:
    """Sortable UTC text for a timestamp. Naive timestamps are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds")


class JournalStore:
    """SQLite-based store for journal entries."""

    REQUIRED_TABLES = [
        "entries",
        "meta",
    ]

    def __init__(self, db_path: Path):
        """Initialize the journal store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    id TEXT PRIMARY KEY,
                    date TEXT NOT NULL,
                    date_utc TEXT NOT NULL,
                    kind TEXT NOT NULL,
                    emotion INTEGER,
                    classification TEXT NOT NULL,
                    content TEXT NOT NULL,
                    title TEXT,
                    tags TEXT NOT NULL,
                    audio_url TEXT,
                    photo_urls TEXT NOT NULL,
                    is_encrypted INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS meta (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

            conn.commit()
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
        finally:
            conn.close()

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> JournalEntry:
        return JournalEntry(
            id=row["id"],
            date=datetime.fromisoformat(row["date"]),
            classification=_classification_adapter.validate_json(row["classification"]),
            content=row["content"],
            title=row["title"],
            tags=frozenset(json.loads(row["tags"])),
            audio_url=row["audio_url"],
            photo_urls=tuple(json.loads(row["photo_urls"])),
            is_encrypted=bool(row["is_encrypted"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    # ==================== Entries ====================

    def save_entry(self, entry: JournalEntry) -> None:
        """Save a journal entry, replacing any entry with the same ID.

        Args:
            entry: Journal entry to save.
        """
        classification = entry.classification
        emotion = (
            int(classification.emotion)
            if isinstance(classification, IntelligentClassification)
            else None
        )
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                INSERT OR REPLACE INTO entries ({_ENTRY_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.id,
                    entry.date.isoformat(),
                    utc_sort_key(entry.date),
                    classification.kind,
                    emotion,
                    classification.model_dump_json(),
                    entry.content,
                    entry.title,
                    json.dumps(sorted(entry.tags)),
                    entry.audio_url,
                    json.dumps(list(entry.photo_urls)),
                    1 if entry.is_encrypted else 0,
                    entry.created_at.isoformat(),
                    entry.updated_at.isoformat(),
                ),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("Saved journal entry %s", entry.id)

    def save_entries(self, entries: Iterable[JournalEntry]) -> int:
        """Save several entries.

        Returns:
            Number of entries saved.
        """
        count = 0
        for entry in entries:
            self.save_entry(entry)
            count += 1
        return count

    def get_entry(self, entry_id: str) -> JournalEntry:
        """Get a single entry.

        Raises:
            EntryNotFoundError: If no entry has this ID.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_ENTRY_COLUMNS} FROM entries WHERE id = ?",
                (entry_id,),
            )
            row = cursor.fetchone()
        finally:
            conn.close()
        if row is None:
            raise EntryNotFoundError(entry_id)
        return self._row_to_entry(row)

    def fetch_entries(self) -> list[JournalEntry]:
        """Get all entries, newest first."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {_ENTRY_COLUMNS} FROM entries ORDER BY date_utc DESC")
            entries = [self._row_to_entry(row) for row in cursor.fetchall()]
        finally:
            conn.close()
        logger.info("Fetched %d journal entries", len(entries))
        return entries

    def fetch_entries_by_emotion(self, emotion: EmotionalState) -> list[JournalEntry]:
        """Get guided entries written with an emotion, newest first."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT {_ENTRY_COLUMNS}
                FROM entries
                WHERE kind = 'intelligent' AND emotion = ?
                ORDER BY date_utc DESC
                """,
                (int(emotion),),
            )
            return [self._row_to_entry(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def fetch_entries_in_range(self, start: datetime, end: datetime) -> list[JournalEntry]:
        """Get entries dated within ``start`` and ``end`` inclusive, newest first."""
        return filter_by_date_range(self.fetch_entries(), start, end)

    def fetch_entries_with_tags(self, tags: Iterable[str]) -> list[JournalEntry]:
        """Get entries carrying all of ``tags``, newest first."""
        return filter_by_tags(self.fetch_entries(), tags)

    def count_entries(self) -> int:
        """Number of stored entries."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) AS count FROM entries")
            return cursor.fetchone()["count"]
        finally:
            conn.close()

    def delete_entry(self, entry_id: str) -> None:
        """Delete an entry.

        Raises:
            EntryNotFoundError: If no entry has this ID.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM entries WHERE id = ?", (entry_id,))
            deleted = cursor.rowcount
            conn.commit()
        finally:
            conn.close()
        if deleted == 0:
            raise EntryNotFoundError(entry_id)
        logger.info("Deleted journal entry %s", entry_id)

    def delete_all_entries(self) -> int:
        """Delete every entry.

        Returns:
            Number of entries removed.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM entries")
            deleted = cursor.rowcount
            conn.commit()
        finally:
            conn.close()
        logger.info("Deleted all %d journal entries", deleted)
        return deleted

    # ==================== Meta ====================

    def get_meta(self, key: str) -> Optional[str]:
        """Get a stored setting value, None if unset."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM meta WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set_meta(self, key: str, value: str) -> None:
        """Store a setting value."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT OR REPLACE INTO meta (key, value) VALUES (?, ?)",
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()
