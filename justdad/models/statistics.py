"""Journal statistics data models."""

from datetime import date as date_type

from pydantic import BaseModel, Field

from justdad.models.entry import EmotionalState


class EmotionTrend(BaseModel):
    """Dominant emotion of a single calendar day.

    ``count`` holds the rank value of the dominant emotion, not the number
    of entries written that day.
    """

    date: date_type = Field(..., description="Calendar day")
    emotion: EmotionalState = Field(..., description="Most frequent emotion that day")
    count: int = Field(..., description="Rank value of the dominant emotion")

    model_config = {"frozen": True}


class JournalStatistics(BaseModel):
    """Aggregate statistics over a set of journal entries."""

    total_entries: int = Field(..., ge=0, description="Number of entries")
    entries_this_week: int = Field(..., ge=0, description="Entries in the current week")
    entries_this_month: int = Field(..., ge=0, description="Entries in the current month")
    average_words_per_entry: float = Field(..., ge=0, description="Mean word count")
    most_used_tags: list[str] = Field(default_factory=list, max_length=5, description="Top tags")
    emotion_trends: list[EmotionTrend] = Field(default_factory=list, description="Daily emotion trend")
    longest_streak: int = Field(..., ge=0, description="Longest run of consecutive days")
    current_streak: int = Field(..., ge=0, description="Run of consecutive days ending today")

    model_config = {"frozen": True}
