"""Statistics command for JustDad CLI.

Shows entry counts, writing streaks, favourite tags and the daily
emotion trend.
"""

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from justdad.cli.common import console, format_emotion, get_settings, get_store
from justdad.stats import compute_statistics


@click.command()
@click.option("--trend-days", type=int, default=14, help="Days of emotion trend to show.")
@click.pass_context
def stats(ctx: click.Context, trend_days: int) -> None:
    """Show journal statistics and writing streaks.

    \b
    Examples:
      justdad stats
      justdad stats --trend-days 30
    """
    settings = get_settings(ctx)
    store = get_store(ctx)

    statistics = compute_statistics(
        store.fetch_entries(),
        settings.now(),
        first_weekday=settings.first_weekday,
    )

    if statistics.total_entries == 0:
        console.print(Panel(
            "[dim]No journal entries yet.[/dim]\n\n"
            "Write one with [cyan]justdad write \"...\"[/cyan]",
            title="[bold]Journal Statistics[/bold]",
            border_style="dim",
        ))
        return

    streak_color = "green" if statistics.current_streak > 0 else "dim"
    summary = (
        f"[bold]Total Entries:[/bold]   {statistics.total_entries}\n"
        f"[bold]This Week:[/bold]       {statistics.entries_this_week}\n"
        f"[bold]This Month:[/bold]      {statistics.entries_this_month}\n"
        f"[bold]Avg Words:[/bold]       {statistics.average_words_per_entry:.1f}\n"
        f"{'─' * 30}\n"
        f"[bold]Current Streak:[/bold]  [{streak_color}]{statistics.current_streak} days[/{streak_color}]\n"
        f"[bold]Longest Streak:[/bold]  {statistics.longest_streak} days"
    )
    if statistics.most_used_tags:
        summary += f"\n\n[bold]Top Tags:[/bold] {escape(', '.join(statistics.most_used_tags))}"

    console.print(Panel(
        summary,
        title="[bold cyan]Journal Statistics[/bold cyan]",
        border_style="cyan",
    ))

    trends = statistics.emotion_trends[-trend_days:] if trend_days > 0 else []
    if not trends:
        return

    table = Table(
        title="Emotion Trend",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("Emotion", justify="center")
    table.add_column("Rank", justify="right")

    for trend in trends:
        table.add_row(
            trend.date.strftime("%Y-%m-%d"),
            format_emotion(trend.emotion),
            str(trend.count),
        )

    console.print(table)
