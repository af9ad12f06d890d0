"""Journal statistics module."""

from justdad.stats.engine import (
    average_words_per_entry,
    calculate_emotion_trends,
    calculate_streaks,
    compute_statistics,
    count_words,
    most_used_tags,
    start_of_month,
    start_of_week,
)

__all__ = [
    "average_words_per_entry",
    "calculate_emotion_trends",
    "calculate_streaks",
    "compute_statistics",
    "count_words",
    "most_used_tags",
    "start_of_month",
    "start_of_week",
]
