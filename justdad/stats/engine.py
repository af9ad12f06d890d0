"""Journal statistics and streak calculation.

Every function here is pure: entries and the reference time are passed
in explicitly and nothing reads the system clock. Calendar days are taken
in the timezone of ``now``; naive datetimes are used as wall-clock time.
"""

from collections import Counter
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional, Sequence

from justdad.models import (
    EmotionTrend,
    IntelligentClassification,
    JournalEntry,
    JournalStatistics,
    TraditionalClassification,
)

MAX_TOP_TAGS = 5


def wall_clock(moment: datetime, tz: Optional[tzinfo]) -> datetime:
    """Convert a timestamp to naive local time in ``tz``."""
    if moment.tzinfo is None:
        return moment
    if tz is not None:
        moment = moment.astimezone(tz)
    return moment.replace(tzinfo=None)


def entry_day(entry: JournalEntry, tz: Optional[tzinfo] = None) -> date:
    """Calendar day an entry belongs to."""
    return wall_clock(entry.date, tz).date()


def start_of_week(day: date, first_weekday: int = 0) -> date:
    """First day of the calendar week containing ``day``.

    Args:
        day: Any day of the week.
        first_weekday: Weekday the week starts on (0=Monday ... 6=Sunday).

    Returns:
        The date the week starts on.
    """
    offset = (day.weekday() - first_weekday) % 7
    return day - timedelta(days=offset)


def start_of_month(day: date) -> date:
    """First day of the month containing ``day``."""
    return day.replace(day=1)


def count_words(content: str) -> int:
    """Count whitespace-delimited words."""
    return len(content.split())


def average_words_per_entry(entries: Sequence[JournalEntry]) -> float:
    """Mean word count across entries, 0.0 when there are none."""
    if not entries:
        return 0.0
    total_words = sum(count_words(entry.content) for entry in entries)
    return total_words / len(entries)


def most_used_tags(entries: Iterable[JournalEntry], limit: int = MAX_TOP_TAGS) -> list[str]:
    """Rank tags by how many entries use them.

    Tags with equal counts are ordered alphabetically.
    """
    counts = Counter(tag for entry in entries for tag in entry.tags)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [tag for tag, _ in ranked[:limit]]


def calculate_emotion_trends(
    entries: Iterable[JournalEntry], tz: Optional[tzinfo] = None
) -> list[EmotionTrend]:
    """Dominant emotion per calendar day over guided entries.

    Free-form entries are ignored. When two emotions are equally frequent
    on a day, the one written first that day wins. The trend ``count`` is
    the emotion's rank value.

    Returns:
        One trend per day with at least one guided entry, oldest day first.
    """
    per_day: dict[date, Counter] = {}
    ordered = sorted(entries, key=lambda entry: wall_clock(entry.date, tz))

    for entry in ordered:
        classification = entry.classification
        if isinstance(classification, IntelligentClassification):
            day = entry_day(entry, tz)
            per_day.setdefault(day, Counter())[classification.emotion] += 1
        elif isinstance(classification, TraditionalClassification):
            continue
        else:
            raise TypeError(f"Unknown classification: {classification!r}")

    trends = []
    for day in sorted(per_day):
        emotion, _ = per_day[day].most_common(1)[0]
        trends.append(EmotionTrend(date=day, emotion=emotion, count=int(emotion)))
    return trends


def calculate_streaks(days: Iterable[date], today: date) -> tuple[int, int]:
    """Calculate the longest and current streak of consecutive entry-days.

    Days are walked newest first. The longest streak is the longest run of
    days one apart. The current streak starts counting only at ``today``
    and extends while each next day is exactly one day older than the last
    counted day; the first earlier day that breaks the run ends it. Days
    after ``today`` are skipped by the current-streak walk.

    Args:
        days: Calendar days that have at least one entry. Duplicates are
            allowed.
        today: Reference day.

    Returns:
        Tuple of (longest_streak, current_streak).
    """
    entry_days = sorted(set(days), reverse=True)
    if not entry_days:
        return 0, 0

    longest_streak = 1
    temp_streak = 1
    current_streak = 0
    last_counted: Optional[date] = None
    counting = True

    for i, day in enumerate(entry_days):
        if i > 0:
            if (entry_days[i - 1] - day).days == 1:
                temp_streak += 1
            else:
                longest_streak = max(longest_streak, temp_streak)
                temp_streak = 1

        if not counting:
            continue
        if day == today or (
            current_streak > 0 and last_counted is not None and (last_counted - day).days == 1
        ):
            current_streak += 1
            last_counted = day
        elif day < today:
            counting = False

    longest_streak = max(longest_streak, temp_streak)
    return longest_streak, current_streak


def compute_statistics(
    entries: Iterable[JournalEntry],
    now: datetime,
    first_weekday: int = 0,
) -> JournalStatistics:
    """Compute journal statistics for a snapshot of entries.

    Args:
        entries: Entries to summarize, in any order.
        now: Reference time. Its timezone decides calendar days.
        first_weekday: Weekday the week starts on (0=Monday ... 6=Sunday).

    Returns:
        Freshly computed statistics.
    """
    entries = list(entries)
    tz = now.tzinfo
    today = wall_clock(now, tz).date()
    days = [entry_day(entry, tz) for entry in entries]

    # The week window never reaches back past the start of the month, so
    # week counts stay within month counts.
    month_start = start_of_month(today)
    week_start = max(start_of_week(today, first_weekday), month_start)

    entries_this_week = sum(1 for day in days if day >= week_start)
    entries_this_month = sum(1 for day in days if day >= month_start)

    longest_streak, current_streak = calculate_streaks(days, today)

    return JournalStatistics(
        total_entries=len(entries),
        entries_this_week=entries_this_week,
        entries_this_month=entries_this_month,
        average_words_per_entry=average_words_per_entry(entries),
        most_used_tags=most_used_tags(entries),
        emotion_trends=calculate_emotion_trends(entries, tz),
        longest_streak=longest_streak,
        current_streak=current_streak,
    )
