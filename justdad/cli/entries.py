"""Journal entry commands for JustDad CLI.

Handles writing, editing, listing, searching, deleting and exporting entries.
"""

from datetime import timedelta
from pathlib import Path
from typing import Optional

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from justdad.cli.common import (
    EMOTION_CHOICES,
    EMOTION_COLORS,
    console,
    fail,
    format_emotion,
    get_settings,
    get_store,
    parse_emotion,
)
from justdad.errors import EntryNotFoundError
from justdad.journal import (
    export_entries_json,
    filter_by_emotion,
    filter_by_tags,
    generate_prompt,
    get_prompts,
    search_entries,
)
from justdad.models import JournalEntry, TraditionalClassification


def _entries_table(entries: list[JournalEntry], title: str) -> Table:
    table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Date", style="bold")
    table.add_column("Emotion", justify="center")
    table.add_column("Tags")
    table.add_column("Entry", max_width=40)

    for entry in entries:
        if entry.emotion is not None:
            emotion_str = format_emotion(entry.emotion)
        else:
            mood = entry.classification.mood if isinstance(entry.classification, TraditionalClassification) else ""
            emotion_str = f"[dim]{escape(mood) or '-'}[/dim]"

        text = entry.title or entry.content
        table.add_row(
            entry.id[:8],
            entry.date.strftime("%Y-%m-%d %H:%M"),
            emotion_str,
            escape(", ".join(sorted(entry.tags))) or "-",
            escape(text[:37] + "...") if len(text) > 40 else (escape(text) or "-"),
        )

    return table


def _resolve_entry_id(store, entry_id: str) -> str:
    """Expand a short ID prefix to a full entry ID."""
    matches = [entry.id for entry in store.fetch_entries() if entry.id.startswith(entry_id)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        fail(f"Entry ID '{entry_id}' is ambiguous ({len(matches)} matches).")
    raise EntryNotFoundError(entry_id)


@click.command()
@click.argument("content")
@click.option(
    "--emotion",
    "-e",
    type=click.Choice(EMOTION_CHOICES, case_sensitive=False),
    default=None,
    help="How you feel. Makes this a guided entry.",
)
@click.option("--mood", default="", help="Free-text mood for a diary entry.")
@click.option("--title", default=None, help="Title for a diary entry.")
@click.option("--tag", "-t", "tags", multiple=True, help="Tag the entry (repeatable).")
@click.option("--audio", "audio_url", default=None, help="Link to a voice note.")
@click.pass_context
def write(
    ctx: click.Context,
    content: str,
    emotion: Optional[str],
    mood: str,
    title: Optional[str],
    tags: tuple[str, ...],
    audio_url: Optional[str],
) -> None:
    """Write a new journal entry.

    With --emotion the entry is a guided entry and a prompt matching
    the emotion is attached. Without it the entry is a diary entry.

    \b
    Examples:
      justdad write "Great weekend with the kids" -e happy -t kids
      justdad write "Long day at work" --mood tired --title Monday
    """
    settings = get_settings(ctx)
    store = get_store(ctx)
    now = settings.now()

    if emotion is not None:
        state = parse_emotion(emotion)
        entry = JournalEntry.intelligent(
            state,
            generate_prompt(state),
            content,
            date=now,
            tags=tags,
            audio_url=audio_url,
        )
    else:
        entry = JournalEntry.traditional(
            content,
            date=now,
            mood=mood,
            title=title,
            tags=tags,
            audio_url=audio_url,
        )

    store.save_entry(entry)

    details = f"[bold]ID:[/bold] {entry.id}\n[bold]Words:[/bold] {entry.word_count}"
    if entry.emotion is not None:
        details += f"\n[bold]Prompt:[/bold] {entry.classification.prompt.text}"
    console.print(Panel(
        details,
        title="[bold green]Entry Saved[/bold green]",
        border_style="green",
    ))


@click.command(name="list")
@click.option("--days", type=int, default=None, help="Only entries from the last N days.")
@click.option(
    "--emotion",
    "-e",
    type=click.Choice(EMOTION_CHOICES, case_sensitive=False),
    default=None,
    help="Only guided entries with this emotion.",
)
@click.option("--tag", "-t", "tags", multiple=True, help="Only entries with all these tags.")
@click.pass_context
def list_entries(
    ctx: click.Context,
    days: Optional[int],
    emotion: Optional[str],
    tags: tuple[str, ...],
) -> None:
    """List journal entries, newest first.

    \b
    Examples:
      justdad list
      justdad list --days 7
      justdad list -e sad -t kids
    """
    settings = get_settings(ctx)
    store = get_store(ctx)

    if days is not None:
        now = settings.now()
        entries = store.fetch_entries_in_range(now - timedelta(days=days), now)
        if tags:
            entries = filter_by_tags(entries, tags)
    elif tags:
        entries = store.fetch_entries_with_tags(tags)
    else:
        entries = store.fetch_entries()

    if emotion is not None:
        entries = filter_by_emotion(entries, parse_emotion(emotion))

    if not entries:
        console.print(Panel(
            "[dim]No journal entries found[/dim]",
            title="[bold]Journal[/bold]",
            border_style="dim",
        ))
        return

    console.print(_entries_table(entries, "Journal"))
    console.print(f"\n[bold]Total Entries:[/bold] {len(entries)}")


@click.command()
@click.argument("query")
@click.option(
    "--emotion",
    "-e",
    type=click.Choice(EMOTION_CHOICES, case_sensitive=False),
    default=None,
    help="Only guided entries with this emotion.",
)
@click.pass_context
def search(ctx: click.Context, query: str, emotion: Optional[str]) -> None:
    """Search entry text, titles and tags.

    \b
    Examples:
      justdad search dentist
    """
    store = get_store(ctx)
    if emotion is not None:
        entries = store.fetch_entries_by_emotion(parse_emotion(emotion))
    else:
        entries = store.fetch_entries()
    entries = search_entries(entries, query)

    if not entries:
        console.print(f"[dim]No entries match '{escape(query)}'[/dim]")
        return

    console.print(_entries_table(entries, f"Search: {escape(query)}"))


@click.command()
@click.argument("entry_id")
@click.pass_context
def show(ctx: click.Context, entry_id: str) -> None:
    """Show a single entry in full. Accepts an ID prefix."""
    store = get_store(ctx)
    try:
        entry = store.get_entry(_resolve_entry_id(store, entry_id))
    except EntryNotFoundError as e:
        fail(str(e))

    lines = [f"[bold]Date:[/bold] {entry.date.strftime('%Y-%m-%d %H:%M')}"]
    if entry.emotion is not None:
        lines.append(f"[bold]Emotion:[/bold] {format_emotion(entry.emotion)}")
        lines.append(f"[bold]Prompt:[/bold] {entry.classification.prompt.text}")
    elif entry.classification.mood:
        lines.append(f"[bold]Mood:[/bold] {escape(entry.classification.mood)}")
    if entry.tags:
        lines.append(f"[bold]Tags:[/bold] {escape(', '.join(sorted(entry.tags)))}")
    if entry.audio_url:
        lines.append(f"[bold]Audio:[/bold] {entry.audio_url}")
    lines.append("")
    lines.append(escape(entry.content))

    console.print(Panel(
        "\n".join(lines),
        title=f"[bold cyan]{escape(entry.title or entry.id)}[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.argument("entry_id")
@click.option("--content", default=None, help="Replace the entry text.")
@click.option("--add-tag", "add_tags", multiple=True, help="Add a tag (repeatable).")
@click.option("--remove-tag", "remove_tags", multiple=True, help="Remove a tag (repeatable).")
@click.option("--add-photo", "add_photos", multiple=True, help="Attach a photo link (repeatable).")
@click.option("--remove-photo", "remove_photos", multiple=True, help="Detach a photo link (repeatable).")
@click.pass_context
def edit(
    ctx: click.Context,
    entry_id: str,
    content: Optional[str],
    add_tags: tuple[str, ...],
    remove_tags: tuple[str, ...],
    add_photos: tuple[str, ...],
    remove_photos: tuple[str, ...],
) -> None:
    """Edit an entry. Accepts an ID prefix.

    \b
    Examples:
      justdad edit 3f2a --add-tag kids --remove-tag work
      justdad edit 3f2a --content "Rewrote this one"
    """
    if content is None and not (add_tags or remove_tags or add_photos or remove_photos):
        fail("Nothing to change. Use --content, --add-tag, --remove-tag, --add-photo or --remove-photo.")

    settings = get_settings(ctx)
    store = get_store(ctx)
    try:
        entry = store.get_entry(_resolve_entry_id(store, entry_id))
    except EntryNotFoundError as e:
        fail(str(e))

    now = settings.now()
    if content is not None:
        entry = entry.with_content(content, now)
    for tag in add_tags:
        entry = entry.with_tag(tag, now)
    for tag in remove_tags:
        entry = entry.without_tag(tag, now)
    for url in add_photos:
        entry = entry.with_photo(url, now)
    for url in remove_photos:
        entry = entry.without_photo(url, now)

    store.save_entry(entry)

    console.print(Panel(
        f"[bold]ID:[/bold] {entry.id}\n"
        f"[bold]Words:[/bold] {entry.word_count}\n"
        f"[bold]Tags:[/bold] {escape(', '.join(sorted(entry.tags))) or '-'}\n"
        f"[bold]Photos:[/bold] {len(entry.photo_urls)}",
        title="[bold green]Entry Updated[/bold green]",
        border_style="green",
    ))


@click.command()
@click.argument("entry_id")
@click.pass_context
def delete(ctx: click.Context, entry_id: str) -> None:
    """Delete an entry. Accepts an ID prefix."""
    store = get_store(ctx)
    try:
        full_id = _resolve_entry_id(store, entry_id)
        store.delete_entry(full_id)
    except EntryNotFoundError as e:
        fail(str(e))

    console.print(f"[green]✓[/green] Deleted entry {full_id}")


@click.command()
@click.confirmation_option(prompt="Delete ALL journal entries?")
@click.pass_context
def clear(ctx: click.Context) -> None:
    """Delete every journal entry."""
    deleted = get_store(ctx).delete_all_entries()
    console.print(f"[green]✓[/green] Deleted {deleted} entries")


@click.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to a file instead of stdout.",
)
@click.pass_context
def export(ctx: click.Context, output: Optional[Path]) -> None:
    """Export all entries as JSON."""
    document = export_entries_json(get_store(ctx).fetch_entries())

    if output is None:
        click.echo(document)
        return

    output.write_text(document, encoding="utf-8")
    console.print(f"[green]✓[/green] Exported entries to {output}")


@click.command()
@click.argument("emotion", type=click.Choice(EMOTION_CHOICES, case_sensitive=False))
@click.option("--all", "show_all", is_flag=True, default=False, help="Show every prompt.")
def prompt(emotion: str, show_all: bool) -> None:
    """Suggest a writing prompt for how you feel.

    \b
    Examples:
      justdad prompt sad
      justdad prompt happy --all
    """
    state = parse_emotion(emotion)
    prompts = get_prompts(state) if show_all else [generate_prompt(state)]

    for item in prompts:
        console.print(Panel(
            f"{item.text}\n\n[dim]{item.category.value} · {item.estimated_time}[/dim]",
            title=f"[bold]{state.display_name}[/bold]",
            border_style=EMOTION_COLORS[state],
        ))
