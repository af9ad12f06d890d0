"""Property-based tests for the journal statistics engine.

**Feature: journal-statistics**
"""

import random
from collections import Counter
from datetime import date, datetime, timedelta, timezone

from hypothesis import given, settings
from hypothesis import strategies as st

from justdad.models import EmotionalState, EmotionTrend
from justdad.stats.engine import (
    calculate_emotion_trends,
    calculate_streaks,
    compute_statistics,
    count_words,
    most_used_tags,
    start_of_month,
    start_of_week,
)
from strategies import entry_strategy, make_entry

# Wednesday
NOW = datetime(2024, 5, 15, 18, 0)
TODAY = NOW.date()


def days_ago(n: int, hour: int = 12) -> datetime:
    return datetime.combine(TODAY - timedelta(days=n), datetime.min.time()).replace(hour=hour)


class TestEmptyInput:
    """
    **Property 1: Empty Input**

    An empty entry collection yields all-zero statistics.
    """

    def test_empty_statistics(self):
        stats = compute_statistics([], NOW)

        assert stats.total_entries == 0
        assert stats.entries_this_week == 0
        assert stats.entries_this_month == 0
        assert stats.average_words_per_entry == 0.0
        assert stats.most_used_tags == []
        assert stats.emotion_trends == []
        assert stats.longest_streak == 0
        assert stats.current_streak == 0

    def test_empty_streaks(self):
        assert calculate_streaks([], TODAY) == (0, 0)


class TestStatisticsInvariants:
    """
    **Property 2: Statistics Invariants**

    *For any* entries and reference time, window counts are nested,
    at most five tags are reported in non-increasing frequency, and the
    current streak never exceeds the longest streak.
    """

    @given(
        entries=st.lists(entry_strategy(), max_size=40),
        now=st.datetimes(min_value=datetime(2023, 1, 1), max_value=datetime(2025, 1, 31)),
        first_weekday=st.integers(min_value=0, max_value=6),
    )
    @settings(max_examples=150)
    def test_window_counts_nested(self, entries, now, first_weekday):
        stats = compute_statistics(entries, now, first_weekday=first_weekday)

        assert stats.entries_this_week <= stats.entries_this_month <= stats.total_entries
        assert stats.total_entries == len(entries)

    @given(
        entries=st.lists(entry_strategy(), max_size=40),
        now=st.datetimes(min_value=datetime(2023, 1, 1), max_value=datetime(2025, 1, 31)),
    )
    @settings(max_examples=150)
    def test_current_streak_within_longest(self, entries, now):
        stats = compute_statistics(entries, now)

        assert 0 <= stats.current_streak <= stats.longest_streak
        if entries:
            assert stats.longest_streak >= 1

    @given(entries=st.lists(entry_strategy(), max_size=40))
    @settings(max_examples=100)
    def test_most_used_tags_ranked(self, entries):
        tags = compute_statistics(entries, NOW).most_used_tags
        counts = Counter(tag for entry in entries for tag in entry.tags)

        assert len(tags) <= 5
        assert len(tags) == min(5, len(counts))
        for first, second in zip(tags, tags[1:]):
            assert counts[first] >= counts[second]
        if tags:
            lowest = counts[tags[-1]]
            for tag, count in counts.items():
                if tag not in tags:
                    assert count <= lowest

    @given(entries=st.lists(entry_strategy(), max_size=40))
    @settings(max_examples=100)
    def test_average_words(self, entries):
        stats = compute_statistics(entries, NOW)

        if entries:
            expected = sum(len(e.content.split()) for e in entries) / len(entries)
            assert abs(stats.average_words_per_entry - expected) < 1e-9
        else:
            assert stats.average_words_per_entry == 0.0

    @given(
        entries=st.lists(entry_strategy(), max_size=40),
        now=st.datetimes(min_value=datetime(2023, 1, 1), max_value=datetime(2025, 1, 31)),
    )
    @settings(max_examples=100)
    def test_idempotent(self, entries, now):
        assert compute_statistics(entries, now) == compute_statistics(entries, now)

    @given(entries=st.lists(entry_strategy(), max_size=40))
    @settings(max_examples=100)
    def test_one_trend_per_guided_day(self, entries):
        trends = compute_statistics(entries, NOW).emotion_trends
        guided_days = {e.date.date() for e in entries if e.emotion is not None}

        assert [t.date for t in trends] == sorted(guided_days)
        for trend in trends:
            assert trend.count == int(trend.emotion)


class TestStreaks:
    """
    **Property 3: Streak Calculation**

    Longest streak is the longest run of consecutive entry-days. The
    current streak only starts at today and stops at the first gap.
    """

    def test_run_ending_today(self):
        entries = [make_entry(days_ago(n)) for n in (0, 1, 2, 5)]
        stats = compute_statistics(entries, NOW)

        assert stats.longest_streak == 3
        assert stats.current_streak == 3

    def test_no_entry_today(self):
        entries = [make_entry(days_ago(n)) for n in (1, 2)]
        stats = compute_statistics(entries, NOW)

        assert stats.longest_streak == 2
        assert stats.current_streak == 0

    def test_single_day_today(self):
        stats = compute_statistics([make_entry(days_ago(0))], NOW)

        assert stats.longest_streak == 1
        assert stats.current_streak == 1

    def test_single_day_in_past(self):
        stats = compute_statistics([make_entry(days_ago(3))], NOW)

        assert stats.longest_streak == 1
        assert stats.current_streak == 0

    def test_same_day_entries_count_once(self):
        entries = [make_entry(days_ago(0, hour=h)) for h in (8, 12, 22)]
        stats = compute_statistics(entries, NOW)

        assert stats.longest_streak == 1
        assert stats.current_streak == 1

    def test_longest_run_in_the_past(self):
        entries = [make_entry(days_ago(n)) for n in (0, 3, 4, 5, 6)]
        stats = compute_statistics(entries, NOW)

        assert stats.longest_streak == 4
        assert stats.current_streak == 1

    def test_gap_stops_current_streak(self):
        assert calculate_streaks(
            [TODAY, TODAY - timedelta(days=1), TODAY - timedelta(days=3)], TODAY
        ) == (2, 2)

    def test_future_days_skipped_by_current_streak(self):
        days = [TODAY + timedelta(days=1), TODAY, TODAY - timedelta(days=1)]

        assert calculate_streaks(days, TODAY) == (3, 2)

    def test_only_future_days(self):
        assert calculate_streaks([TODAY + timedelta(days=2)], TODAY) == (1, 0)

    @given(
        offsets=st.lists(st.integers(min_value=-3, max_value=60), max_size=30),
        seed=st.integers(min_value=0, max_value=1000),
    )
    @settings(max_examples=100)
    def test_input_order_irrelevant(self, offsets, seed):
        days = [TODAY - timedelta(days=n) for n in offsets]
        shuffled = list(days)
        random.Random(seed).shuffle(shuffled)

        assert calculate_streaks(days, TODAY) == calculate_streaks(shuffled, TODAY)

    @given(length=st.integers(min_value=1, max_value=30))
    @settings(max_examples=30)
    def test_unbroken_run_to_today(self, length):
        days = [TODAY - timedelta(days=n) for n in range(length)]

        assert calculate_streaks(days, TODAY) == (length, length)


class TestWindowCounts:
    """
    **Property 4: Week and Month Windows**

    Window starts are inclusive and anchored to the reference day.
    """

    def test_week_starts_monday_by_default(self):
        assert start_of_week(TODAY) == date(2024, 5, 13)
        assert start_of_week(date(2024, 5, 13)) == date(2024, 5, 13)

    def test_week_start_sunday(self):
        assert start_of_week(TODAY, first_weekday=6) == date(2024, 5, 12)

    def test_month_start(self):
        assert start_of_month(TODAY) == date(2024, 5, 1)

    def test_window_start_inclusive(self):
        entries = [
            make_entry(datetime(2024, 5, 13, 0, 0)),
            make_entry(datetime(2024, 5, 12, 23, 59)),
            make_entry(datetime(2024, 5, 1, 0, 0)),
            make_entry(datetime(2024, 4, 30, 23, 59)),
        ]
        stats = compute_statistics(entries, NOW)

        assert stats.entries_this_week == 1
        assert stats.entries_this_month == 3
        assert stats.total_entries == 4

    def test_first_weekday_moves_window(self):
        entries = [make_entry(datetime(2024, 5, 12, 10, 0))]

        assert compute_statistics(entries, NOW).entries_this_week == 0
        assert compute_statistics(entries, NOW, first_weekday=6).entries_this_week == 1

    def test_week_clamped_to_month(self):
        # Thursday 2 May; the week began on Monday 29 April.
        now = datetime(2024, 5, 2, 9, 0)
        entries = [make_entry(datetime(2024, 4, 30, 10, 0)), make_entry(datetime(2024, 5, 1, 10, 0))]
        stats = compute_statistics(entries, now)

        assert stats.entries_this_week == 1
        assert stats.entries_this_month == 1


class TestTimezones:
    """
    **Property 5: Calendar Days Follow the Reference Timezone**
    """

    def test_entry_day_in_reference_zone(self):
        eastern = timezone(timedelta(hours=-4))
        now = datetime(2024, 5, 15, 20, 0, tzinfo=eastern)
        # 03:00 UTC on the 16th is 23:00 on the 15th in UTC-4.
        entry = make_entry(datetime(2024, 5, 16, 3, 0, tzinfo=timezone.utc))

        stats = compute_statistics([entry], now)

        assert stats.current_streak == 1

    def test_entry_before_midnight_is_previous_day(self):
        eastern = timezone(timedelta(hours=-4))
        now = datetime(2024, 5, 15, 1, 0, tzinfo=eastern)
        entry = make_entry(datetime(2024, 5, 15, 3, 0, tzinfo=timezone.utc))

        stats = compute_statistics([entry], now)

        assert stats.current_streak == 0
        assert stats.longest_streak == 1


class TestTagsAndWords:
    """
    **Property 6: Tag Ranking and Word Counts**
    """

    def test_dentist_ranks_first(self):
        entries = [
            make_entry(days_ago(0, hour=9), tags=["dentist"]),
            make_entry(days_ago(0, hour=10), tags=["dentist"]),
            make_entry(days_ago(0, hour=11), tags=["school"]),
        ]

        assert compute_statistics(entries, NOW).most_used_tags[0] == "dentist"

    def test_ties_alphabetical(self):
        entries = [make_entry(days_ago(0), tags=["school"]), make_entry(days_ago(1), tags=["court"])]

        assert most_used_tags(entries) == ["court", "school"]

    def test_top_five_only(self):
        entries = [make_entry(days_ago(0), tags=[f"tag{i}" for i in range(8)])]

        assert len(most_used_tags(entries)) == 5

    def test_word_count(self):
        assert count_words("a b c d") == 4
        assert count_words("") == 0
        assert count_words("  spaced   out\nlines ") == 3

    def test_single_entry_average(self):
        stats = compute_statistics([make_entry(days_ago(0), content="a b c d")], NOW)

        assert stats.average_words_per_entry == 4.0


class TestEmotionTrends:
    """
    **Property 7: Emotion Trend**

    One trend per day with guided entries; the weight is the dominant
    emotion's rank value.
    """

    def test_dominant_emotion_and_rank_weight(self):
        entries = [
            make_entry(days_ago(0, hour=8), emotion=EmotionalState.SAD),
            make_entry(days_ago(0, hour=9), emotion=EmotionalState.HAPPY),
            make_entry(days_ago(0, hour=10), emotion=EmotionalState.HAPPY),
        ]

        trends = calculate_emotion_trends(entries)

        # Weight is the rank of HAPPY, not the two entries written.
        assert trends == [EmotionTrend(date=TODAY, emotion=EmotionalState.HAPPY, count=4)]

    def test_tie_goes_to_earliest_entry(self):
        entries = [
            make_entry(days_ago(0, hour=10), emotion=EmotionalState.SAD),
            make_entry(days_ago(0, hour=9), emotion=EmotionalState.VERY_HAPPY),
        ]

        trends = calculate_emotion_trends(entries)

        assert trends[0].emotion == EmotionalState.VERY_HAPPY
        assert trends[0].count == 5

    def test_diary_entries_ignored(self):
        entries = [make_entry(days_ago(0)), make_entry(days_ago(1))]

        assert calculate_emotion_trends(entries) == []

    def test_days_sorted_oldest_first(self):
        entries = [
            make_entry(days_ago(0), emotion=EmotionalState.NEUTRAL),
            make_entry(days_ago(4), emotion=EmotionalState.VERY_SAD),
            make_entry(days_ago(2), emotion=EmotionalState.HAPPY),
        ]

        trends = calculate_emotion_trends(entries)

        assert [t.date for t in trends] == [TODAY - timedelta(days=4), TODAY - timedelta(days=2), TODAY]
        assert [t.count for t in trends] == [1, 4, 3]
