"""Guided journaling prompts keyed by emotion."""

import random
from typing import Optional

from justdad.models import EmotionalState, JournalPrompt, PromptCategory

FALLBACK_PROMPT = JournalPrompt(
    text="Write about your day.",
    category=PromptCategory.REFLECTION,
    estimated_time="5 min",
)

PROMPTS: dict[EmotionalState, list[JournalPrompt]] = {
    EmotionalState.VERY_SAD: [
        JournalPrompt(
            text="What is causing this deep sadness? Is there something specific you can name?",
            category=PromptCategory.SELF_AWARENESS,
            estimated_time="7 min",
        ),
        JournalPrompt(
            text="What has given you strength in hard moments before?",
            category=PromptCategory.GROWTH,
            estimated_time="6 min",
        ),
    ],
    EmotionalState.SAD: [
        JournalPrompt(
            text="Describe three things you are grateful for, even if they are hard to find right now.",
            category=PromptCategory.GRATITUDE,
            estimated_time="5 min",
        ),
        JournalPrompt(
            text="What small action can you take today to lift your mood?",
            category=PromptCategory.SELF_CARE,
            estimated_time="4 min",
        ),
    ],
    EmotionalState.NEUTRAL: [
        JournalPrompt(
            text="Which small moments today brought you peace or satisfaction?",
            category=PromptCategory.SELF_AWARENESS,
            estimated_time="5 min",
        ),
        JournalPrompt(
            text="How do you feel about your role as a father today?",
            category=PromptCategory.PARENTING,
            estimated_time="6 min",
        ),
    ],
    EmotionalState.HAPPY: [
        JournalPrompt(
            text="What made you smile today? Describe the moment in detail.",
            category=PromptCategory.GRATITUDE,
            estimated_time="5 min",
        ),
        JournalPrompt(
            text="How can you share this happiness with your children or loved ones?",
            category=PromptCategory.CONNECTION,
            estimated_time="6 min",
        ),
    ],
    EmotionalState.VERY_HAPPY: [
        JournalPrompt(
            text="Which achievement or experience makes you proudest today?",
            category=PromptCategory.CELEBRATION,
            estimated_time="7 min",
        ),
        JournalPrompt(
            text="How can you keep this positive energy going over the next few days?",
            category=PromptCategory.PLANNING,
            estimated_time="6 min",
        ),
    ],
}


def get_prompts(emotion: EmotionalState) -> list[JournalPrompt]:
    """All prompts offered for an emotion."""
    return list(PROMPTS.get(emotion, []))


def generate_prompt(emotion: EmotionalState, rng: Optional[random.Random] = None) -> JournalPrompt:
    """Pick one prompt for an emotion.

    Args:
        emotion: How the writer feels.
        rng: Random source, defaults to the module-level generator.

    Returns:
        A prompt for the emotion, or a generic reflection prompt.
    """
    prompts = get_prompts(emotion)
    if not prompts:
        return FALLBACK_PROMPT
    chooser = rng or random
    return chooser.choice(prompts)
