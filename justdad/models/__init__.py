"""Data models for JustDad."""

from justdad.models.entry import (
    Classification,
    EmotionalState,
    IntelligentClassification,
    JournalEntry,
    JournalPrompt,
    PromptCategory,
    TraditionalClassification,
)
from justdad.models.statistics import EmotionTrend, JournalStatistics

__all__ = [
    "Classification",
    "EmotionalState",
    "EmotionTrend",
    "IntelligentClassification",
    "JournalEntry",
    "JournalPrompt",
    "JournalStatistics",
    "PromptCategory",
    "TraditionalClassification",
]
