"""Helpers shared by CLI command modules."""

from typing import NoReturn

import click
from rich.console import Console
from rich.panel import Panel

from justdad.config import Settings
from justdad.db.store import JournalStore
from justdad.models import EmotionalState

console = Console()

EMOTION_CHOICES = [emotion.name.lower() for emotion in EmotionalState]

EMOTION_COLORS = {
    EmotionalState.VERY_SAD: "red",
    EmotionalState.SAD: "yellow",
    EmotionalState.NEUTRAL: "white",
    EmotionalState.HAPPY: "green",
    EmotionalState.VERY_HAPPY: "blue",
}


def parse_emotion(value: str) -> EmotionalState:
    return EmotionalState[value.upper()]


def format_emotion(emotion: EmotionalState) -> str:
    color = EMOTION_COLORS[emotion]
    return f"[{color}]{emotion.display_name}[/{color}]"


def get_settings(ctx: click.Context) -> Settings:
    """Settings loaded by the root command."""
    return ctx.find_root().obj["settings"]


def get_store(ctx: click.Context) -> JournalStore:
    """Journal store at the configured path."""
    return JournalStore(get_settings(ctx).db_path)


def fail(message: str, title: str = "Error") -> NoReturn:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)
