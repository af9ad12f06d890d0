"""Legacy data migration command for JustDad CLI."""

from pathlib import Path
from typing import Optional

import click

from justdad.cli.common import console, fail, get_settings, get_store
from justdad.db.migration import migrate_legacy_entries
from justdad.errors import MigrationError


@click.command()
@click.option(
    "--path",
    "legacy_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Legacy journal JSON file. Defaults to the configured legacy_path.",
)
@click.pass_context
def migrate(ctx: click.Context, legacy_path: Optional[Path]) -> None:
    """Import entries from the legacy guided-journal format.

    Runs once; later runs do nothing.
    """
    settings = get_settings(ctx)
    store = get_store(ctx)

    try:
        migrated = migrate_legacy_entries(
            store,
            legacy_path or settings.legacy_path,
            settings.now(),
        )
    except MigrationError as e:
        fail(str(e), title="Migration Failed")

    console.print(f"[green]✓[/green] Migrated {migrated} entries")
