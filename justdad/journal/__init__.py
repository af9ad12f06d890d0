"""Journal browsing helpers."""

from justdad.journal.filters import (
    filter_by_date_range,
    filter_by_emotion,
    filter_by_tags,
    search_entries,
)
from justdad.journal.export import export_entries, export_entries_json
from justdad.journal.prompts import generate_prompt, get_prompts

__all__ = [
    "export_entries",
    "export_entries_json",
    "filter_by_date_range",
    "filter_by_emotion",
    "filter_by_tags",
    "generate_prompt",
    "get_prompts",
    "search_entries",
]
