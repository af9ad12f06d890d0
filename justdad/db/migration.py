"""Import journal entries saved by the legacy guided-journal format.

The legacy format is a JSON array of guided entries::

    [{"id": "...", "date": "2024-05-01T21:30:00", "emotion": 4,
      "prompt": {"text": "...", "category": "gratitude", "estimatedTime": "5 min"},
      "content": "...", "audioURLString": null, "tags": ["kids"]}]
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from justdad.db.store import JournalStore
from justdad.errors import MigrationError
from justdad.models import EmotionalState, JournalEntry, JournalPrompt, PromptCategory

logger = logging.getLogger(__name__)

MIGRATION_FLAG = "journal_migration_completed"


class LegacyPrompt(BaseModel):
    text: str
    category: PromptCategory = PromptCategory.REFLECTION
    estimated_time: str = Field(default="5 min", alias="estimatedTime")


class LegacyEntry(BaseModel):
    """A guided entry as stored by the legacy format."""

    id: Optional[str] = None
    date: Optional[datetime] = None
    emotion: EmotionalState
    prompt: LegacyPrompt
    content: str = ""
    audio_url: Optional[str] = Field(default=None, alias="audioURLString")
    tags: list[str] = Field(default_factory=list)

    def to_entry(self, fallback_date: datetime) -> JournalEntry:
        date = self.date or fallback_date
        # Naive legacy timestamps are local wall-clock time.
        if date.tzinfo is None and fallback_date.tzinfo is not None:
            date = date.replace(tzinfo=fallback_date.tzinfo)
        entry = JournalEntry.intelligent(
            self.emotion,
            JournalPrompt(
                text=self.prompt.text,
                category=self.prompt.category,
                estimated_time=self.prompt.estimated_time,
            ),
            self.content,
            date=date,
            tags=tuple(self.tags),
            audio_url=self.audio_url,
        )
        if self.id:
            entry = entry.model_copy(update={"id": self.id})
        return entry


def is_migration_completed(store: JournalStore) -> bool:
    return store.get_meta(MIGRATION_FLAG) == "1"


def load_legacy_entries(legacy_path: Path, now: datetime) -> list[JournalEntry]:
    """Parse a legacy export file.

    Args:
        legacy_path: Path to the legacy JSON file.
        now: Date given to entries that have none.

    Returns:
        Converted entries.

    Raises:
        MigrationError: If the file is not valid legacy data.
    """
    try:
        raw = json.loads(legacy_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MigrationError(f"Legacy journal file is not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise MigrationError("Legacy journal file must contain a JSON array")

    entries = []
    for index, item in enumerate(raw):
        try:
            legacy = LegacyEntry.model_validate(item)
        except ValidationError as e:
            raise MigrationError(f"Invalid legacy entry at index {index}: {e}") from e
        entries.append(legacy.to_entry(now))
    return entries


def migrate_legacy_entries(store: JournalStore, legacy_path: Path, now: datetime) -> int:
    """Import legacy entries into the store once.

    A completed migration is recorded in the store, so later calls do
    nothing. A missing legacy file migrates nothing and still marks the
    migration as completed.

    Args:
        store: Destination store.
        legacy_path: Path to the legacy JSON file.
        now: Date given to entries that have none.

    Returns:
        Number of entries imported.
    """
    logger.info("Starting legacy journal migration from %s", legacy_path)

    if is_migration_completed(store):
        logger.info("Legacy journal migration already completed")
        return 0

    if legacy_path.exists():
        entries = load_legacy_entries(legacy_path, now)
        migrated = store.save_entries(entries)
    else:
        logger.warning("No legacy journal found at %s", legacy_path)
        migrated = 0

    store.set_meta(MIGRATION_FLAG, "1")
    logger.info("Migrated %d legacy journal entries", migrated)
    return migrated
