"""Search and filtering over journal entries."""

from datetime import datetime
from typing import Iterable

from justdad.models import EmotionalState, JournalEntry
from justdad.stats.engine import wall_clock


def search_entries(entries: Iterable[JournalEntry], query: str) -> list[JournalEntry]:
    """Find entries whose content, title or tags contain ``query``.

    Matching is case-insensitive. An empty query matches everything.
    """
    needle = query.casefold()
    results = []
    for entry in entries:
        if needle in entry.content.casefold():
            results.append(entry)
        elif entry.title is not None and needle in entry.title.casefold():
            results.append(entry)
        elif any(needle in tag.casefold() for tag in entry.tags):
            results.append(entry)
    return results


def filter_by_emotion(
    entries: Iterable[JournalEntry], emotion: EmotionalState
) -> list[JournalEntry]:
    """Keep guided entries written with ``emotion``."""
    return [entry for entry in entries if entry.emotion == emotion]


def filter_by_date_range(
    entries: Iterable[JournalEntry], start: datetime, end: datetime
) -> list[JournalEntry]:
    """Keep entries dated within ``start`` and ``end``, both inclusive.

    Aware timestamps are compared as wall-clock time in the timezone of
    ``start``; naive timestamps are taken as already in that zone.
    """
    tz = start.tzinfo or end.tzinfo
    low = wall_clock(start, tz)
    high = wall_clock(end, tz)
    return [entry for entry in entries if low <= wall_clock(entry.date, tz) <= high]


def filter_by_tags(entries: Iterable[JournalEntry], tags: Iterable[str]) -> list[JournalEntry]:
    """Keep entries that carry every one of ``tags``."""
    required = frozenset(tags)
    return [entry for entry in entries if required <= entry.tags]
