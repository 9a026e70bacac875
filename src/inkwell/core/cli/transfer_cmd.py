"""inkwell export / import: JSON backups."""

from __future__ import annotations

import asyncio

import click

from inkwell.core.exceptions import ImportFormatError, SyncError
from inkwell.journal.transfer import read_backup, write_backup

from .common import console, load_config, open_store


@click.command()
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default=None,
    help="Where to write the backup (default: paths.export_dir).",
)
@click.pass_context
def export(ctx: click.Context, output_dir: str | None) -> None:
    """Write every entry to journal-backup-<date>.json."""
    config = load_config(ctx)
    target_dir = output_dir or config.get_path("paths.export_dir")

    async def _run():
        async with open_store(config) as store:
            path = await write_backup(store.entries, target_dir)
            console.print(f"Exported {len(store.entries)} entries to {path}")

    asyncio.run(_run())


@click.command("import")
@click.argument("backup_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_entries(ctx: click.Context, backup_file: str) -> None:
    """Import entries from a JSON backup."""
    config = load_config(ctx)

    async def _run():
        try:
            incoming = await read_backup(backup_file)
        except ImportFormatError as exc:
            raise click.ClickException(str(exc)) from exc

        async with open_store(config) as store:
            try:
                added = await store.import_entries(incoming)
            except SyncError as exc:
                raise click.ClickException(str(exc)) from exc
            console.print(f"Imported {added} new entries")

    asyncio.run(_run())
