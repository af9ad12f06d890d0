"""Export journal entries to a portable JSON document."""

import json
from typing import Iterable

from justdad.models import IntelligentClassification, JournalEntry


def entry_type_name(entry: JournalEntry) -> str:
    if isinstance(entry.classification, IntelligentClassification):
        return "Guided journal"
    return "Diary"


def export_entries(entries: Iterable[JournalEntry]) -> list[dict]:
    """Flatten entries into JSON-serializable summaries."""
    return [
        {
            "id": entry.id,
            "date": entry.date.isoformat(),
            "type": entry_type_name(entry),
            "title": entry.title or "",
            "content": entry.content,
            "tags": ", ".join(sorted(entry.tags)),
            "audio_available": entry.audio_url is not None,
            "photos_count": len(entry.photo_urls),
        }
        for entry in entries
    ]


def export_entries_json(entries: Iterable[JournalEntry]) -> str:
    """Render entries as pretty-printed JSON."""
    return json.dumps(export_entries(entries), indent=2, ensure_ascii=False)
