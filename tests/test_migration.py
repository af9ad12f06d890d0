"""Tests for importing legacy guided-journal data.

**Feature: legacy-migration**
"""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from justdad.db.migration import (
    MIGRATION_FLAG,
    is_migration_completed,
    load_legacy_entries,
    migrate_legacy_entries,
)
from justdad.db.store import JournalStore
from justdad.errors import MigrationError
from justdad.models import EmotionalState, IntelligentClassification, PromptCategory

NOW = datetime(2024, 5, 15, 18, 0, tzinfo=timezone(timedelta(hours=2)))

LEGACY_ENTRIES = [
    {
        "id": "legacy-1",
        "date": "2024-05-01T21:30:00",
        "emotion": 4,
        "prompt": {"text": "What made you smile?", "category": "gratitude", "estimatedTime": "5 min"},
        "content": "Movie night with the kids",
        "audioURLString": None,
        "tags": ["kids"],
    },
    {
        "emotion": 2,
        "prompt": {"text": "What small action helps?", "category": "self_care", "estimatedTime": "4 min"},
        "content": "Missed them today",
        "tags": [],
    },
]


def write_legacy(tmp_path: Path, data) -> Path:
    path = tmp_path / "journal_entries.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadLegacyEntries:
    def test_converts_entries(self, tmp_path: Path):
        entries = load_legacy_entries(write_legacy(tmp_path, LEGACY_ENTRIES), NOW)

        first, second = entries
        assert first.id == "legacy-1"
        assert first.emotion == EmotionalState.HAPPY
        assert isinstance(first.classification, IntelligentClassification)
        assert first.classification.prompt.category == PromptCategory.GRATITUDE
        assert first.tags == frozenset({"kids"})
        assert first.date == datetime(2024, 5, 1, 21, 30, tzinfo=NOW.tzinfo)

        assert second.date == NOW
        assert second.emotion == EmotionalState.SAD

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(MigrationError):
            load_legacy_entries(path, NOW)

    def test_not_a_list(self, tmp_path: Path):
        with pytest.raises(MigrationError):
            load_legacy_entries(write_legacy(tmp_path, {"entries": []}), NOW)

    def test_invalid_emotion(self, tmp_path: Path):
        bad = [dict(LEGACY_ENTRIES[0], emotion=9)]

        with pytest.raises(MigrationError, match="index 0"):
            load_legacy_entries(write_legacy(tmp_path, bad), NOW)


class TestMigrateLegacyEntries:
    def test_migrates_once(self, temp_store: JournalStore, tmp_path: Path):
        path = write_legacy(tmp_path, LEGACY_ENTRIES)

        assert migrate_legacy_entries(temp_store, path, NOW) == 2
        assert is_migration_completed(temp_store)
        assert migrate_legacy_entries(temp_store, path, NOW) == 0
        assert temp_store.count_entries() == 2

    def test_missing_file_marks_completed(self, temp_store: JournalStore, tmp_path: Path):
        assert migrate_legacy_entries(temp_store, tmp_path / "absent.json", NOW) == 0
        assert temp_store.get_meta(MIGRATION_FLAG) == "1"

    def test_failed_migration_not_marked(self, temp_store: JournalStore, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("[", encoding="utf-8")

        with pytest.raises(MigrationError):
            migrate_legacy_entries(temp_store, path, NOW)

        assert not is_migration_completed(temp_store)
