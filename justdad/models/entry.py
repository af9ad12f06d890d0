"""Journal entry data models."""

import uuid
from datetime import datetime
from enum import Enum, IntEnum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator


class EmotionalState(IntEnum):
    """How the writer felt, ranked from 1 (very sad) to 5 (very happy)."""

    VERY_SAD = 1
    SAD = 2
    NEUTRAL = 3
    HAPPY = 4
    VERY_HAPPY = 5

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").title()


class PromptCategory(str, Enum):
    """Category of a guided journaling prompt."""

    REFLECTION = "reflection"
    GRATITUDE = "gratitude"
    GROWTH = "growth"
    SELF_COMPASSION = "self_compassion"
    SELF_CARE = "self_care"
    CELEBRATION = "celebration"
    PARENTING = "parenting"
    CONNECTION = "connection"
    SELF_AWARENESS = "self_awareness"
    PLANNING = "planning"


class JournalPrompt(BaseModel):
    """A guided question offered to the writer."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Prompt ID")
    text: str = Field(..., min_length=1, description="Prompt question")
    category: PromptCategory = Field(..., description="Prompt category")
    estimated_time: str = Field(default="5 min", description="Suggested writing time")

    model_config = {"frozen": True}


class IntelligentClassification(BaseModel):
    """Entry written from a guided prompt with a recorded emotion."""

    kind: Literal["intelligent"] = "intelligent"
    emotion: EmotionalState = Field(..., description="Emotion at time of writing")
    prompt: JournalPrompt = Field(..., description="Prompt that was answered")

    model_config = {"frozen": True}


class TraditionalClassification(BaseModel):
    """Free-form diary entry. Carries no emotion."""

    kind: Literal["traditional"] = "traditional"
    mood: str = Field(default="", description="Free-text mood label")

    model_config = {"frozen": True}


Classification = Annotated[
    Union[IntelligentClassification, TraditionalClassification],
    Field(discriminator="kind"),
]


class JournalEntry(BaseModel):
    """Represents a single journal entry."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Entry ID")
    date: datetime = Field(..., description="When the entry was written")
    classification: Classification
    content: str = Field(default="", description="Entry text")
    title: Optional[str] = Field(default=None, description="Optional title")
    tags: frozenset[str] = Field(default_factory=frozenset, description="Entry tags")
    audio_url: Optional[str] = Field(default=None, description="Attached voice note")
    photo_urls: tuple[str, ...] = Field(default=(), description="Attached photos")
    is_encrypted: bool = Field(default=False, description="Content is encrypted")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last modification timestamp")

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _default_timestamps(cls, data):
        if isinstance(data, dict):
            data = dict(data)
            if data.get("created_at") is None:
                data["created_at"] = data.get("date")
            if data.get("updated_at") is None:
                data["updated_at"] = data["created_at"]
        return data

    @classmethod
    def intelligent(
        cls,
        emotion: EmotionalState,
        prompt: JournalPrompt,
        content: str,
        *,
        date: datetime,
        tags: tuple[str, ...] = (),
        audio_url: Optional[str] = None,
        is_encrypted: bool = False,
    ) -> "JournalEntry":
        """Create a guided entry answering a prompt."""
        return cls(
            date=date,
            classification=IntelligentClassification(emotion=emotion, prompt=prompt),
            content=content,
            tags=frozenset(tags),
            audio_url=audio_url,
            is_encrypted=is_encrypted,
        )

    @classmethod
    def traditional(
        cls,
        content: str,
        *,
        date: datetime,
        mood: str = "",
        title: Optional[str] = None,
        tags: tuple[str, ...] = (),
        audio_url: Optional[str] = None,
        photo_urls: tuple[str, ...] = (),
        is_encrypted: bool = False,
    ) -> "JournalEntry":
        """Create a free-form diary entry."""
        return cls(
            date=date,
            classification=TraditionalClassification(mood=mood),
            content=content,
            title=title,
            tags=frozenset(tags),
            audio_url=audio_url,
            photo_urls=tuple(photo_urls),
            is_encrypted=is_encrypted,
        )

    @property
    def emotion(self) -> Optional[EmotionalState]:
        """Emotion of a guided entry, None for free-form entries."""
        if isinstance(self.classification, IntelligentClassification):
            return self.classification.emotion
        return None

    @property
    def word_count(self) -> int:
        """Number of whitespace-delimited words in the content."""
        return len(self.content.split())

    def with_tag(self, tag: str, at: datetime) -> "JournalEntry":
        if tag in self.tags:
            return self
        return self.model_copy(update={"tags": self.tags | {tag}, "updated_at": at})

    def without_tag(self, tag: str, at: datetime) -> "JournalEntry":
        return self.model_copy(update={"tags": self.tags - {tag}, "updated_at": at})

    def with_content(self, content: str, at: datetime) -> "JournalEntry":
        return self.model_copy(update={"content": content, "updated_at": at})

    def with_photo(self, url: str, at: datetime) -> "JournalEntry":
        return self.model_copy(update={"photo_urls": self.photo_urls + (url,), "updated_at": at})

    def without_photo(self, url: str, at: datetime) -> "JournalEntry":
        photos = tuple(p for p in self.photo_urls if p != url)
        return self.model_copy(update={"photo_urls": photos, "updated_at": at})
