"""inkwell new / list / show / edit / delete: entry commands."""

from __future__ import annotations

import asyncio
from datetime import datetime

import click
from rich.table import Table

from inkwell.journal.models import Mood

from .common import console, load_config, open_store, resolve_entry

MOOD_CHOICE = click.Choice([mood.value for mood in Mood])


def _format_time(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M")


def _update_fields(title, body, mood, tags, clear_mood: bool = False) -> dict:
    fields: dict = {}
    if title is not None:
        fields["title"] = title
    if body is not None:
        fields["body"] = body
    if clear_mood:
        fields["mood"] = None
    elif mood is not None:
        fields["mood"] = mood
    if tags:
        fields["tags"] = list(tags)
    return fields


@click.command()
@click.option("--title", "-t", default=None, help="Entry title.")
@click.option("--body", "-b", default=None, help="Entry text. Reads stdin when '-'.")
@click.option("--mood", "-m", type=MOOD_CHOICE, default=None, help="How you feel.")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable).")
@click.pass_context
def new(ctx: click.Context, title, body, mood, tags) -> None:
    """Write a new journal entry."""
    if body == "-":
        body = click.get_text_stream("stdin").read()
    config = load_config(ctx)

    async def _run():
        async with open_store(config) as store:
            entry = store.create_entry()
            # an entry is saved with a title even if none was given
            fields = _update_fields(title if title is not None else "", body, mood, tags)
            entry = store.update_entry(entry.id, **fields) or entry
            console.print(f"Created [bold]{entry.title}[/bold] ({entry.id[:8]}, {entry.word_count} words)")

    asyncio.run(_run())


@click.command("list")
@click.option("--query", "-q", default="", help="Search titles, bodies and tags.")
@click.option("--mood", "-m", type=MOOD_CHOICE, default=None, help="Only entries with this mood.")
@click.option("--tag", default=None, help="Only entries with this tag.")
@click.pass_context
def list_entries(ctx: click.Context, query: str, mood: str | None, tag: str | None) -> None:
    """List entries, newest first."""
    config = load_config(ctx)

    async def _run():
        async with open_store(config) as store:
            store.search_query = query
            store.filter_mood = mood
            store.filter_tag = tag
            entries = store.visible_entries
            if not entries:
                console.print("No entries.")
                return

            table = Table(show_header=True, header_style="bold")
            table.add_column("ID")
            table.add_column("Created")
            table.add_column("Title")
            table.add_column("Mood")
            table.add_column("Tags")
            table.add_column("Words", justify="right")
            for entry in entries:
                table.add_row(
                    entry.id[:8],
                    _format_time(entry.created_at),
                    entry.title or "(untitled)",
                    entry.mood.value if entry.mood else "",
                    " ".join(f"#{tag}" for tag in entry.tags),
                    str(entry.word_count),
                )
            console.print(table)

    asyncio.run(_run())


@click.command()
@click.argument("entry_ref")
@click.pass_context
def show(ctx: click.Context, entry_ref: str) -> None:
    """Print one entry."""
    config = load_config(ctx)

    async def _run():
        async with open_store(config) as store:
            entry = resolve_entry(store, entry_ref)
            console.print(f"[bold]{entry.title or '(untitled)'}[/bold]")
            meta = [_format_time(entry.created_at), f"{entry.word_count} words"]
            if entry.mood:
                meta.append(entry.mood.value)
            if entry.tags:
                meta.append(" ".join(f"#{tag}" for tag in entry.tags))
            console.print(" | ".join(meta), style="dim")
            console.print()
            console.print(entry.body, markup=False)

    asyncio.run(_run())


@click.command()
@click.argument("entry_ref")
@click.option("--title", "-t", default=None, help="New title.")
@click.option("--body", "-b", default=None, help="New text. Reads stdin when '-'.")
@click.option("--mood", "-m", type=MOOD_CHOICE, default=None, help="New mood.")
@click.option("--clear-mood", is_flag=True, help="Remove the mood.")
@click.option("--tag", "tags", multiple=True, help="Replace tags (repeatable).")
@click.pass_context
def edit(ctx: click.Context, entry_ref: str, title, body, mood, clear_mood: bool, tags) -> None:
    """Change an entry's title, text, mood or tags."""
    if body == "-":
        body = click.get_text_stream("stdin").read()
    fields = _update_fields(title, body, mood, tags, clear_mood=clear_mood)
    if not fields:
        raise click.UsageError("Nothing to change. Pass --title, --body, --mood, --clear-mood or --tag.")
    config = load_config(ctx)

    async def _run():
        async with open_store(config) as store:
            entry = resolve_entry(store, entry_ref)
            updated = store.update_entry(entry.id, **fields)
            console.print(f"Updated [bold]{updated.title}[/bold] ({updated.word_count} words)")

    asyncio.run(_run())


@click.command()
@click.argument("entry_ref")
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation.")
@click.pass_context
def delete(ctx: click.Context, entry_ref: str, yes: bool) -> None:
    """Delete an entry."""
    config = load_config(ctx)

    async def _run():
        async with open_store(config) as store:
            entry = resolve_entry(store, entry_ref)
            if not yes and not click.confirm(f"Delete '{entry.title or entry.id[:8]}'?"):
                return
            store.delete_entry(entry.id)
            console.print(f"Deleted {entry.id[:8]}")

    asyncio.run(_run())
