"""inkwell sync: pull the remote collection (the manual retry)."""

from __future__ import annotations

import asyncio

import click

from .common import console, load_config, open_store


@click.command()
@click.pass_context
def sync(ctx: click.Context) -> None:
    """Refresh entries from the remote store."""
    config = load_config(ctx)

    async def _run():
        async with open_store(config) as store:
            if not store.strategy.has_remote:
                console.print("Local-only journal: nothing to sync.")
                return
            # load() already tried once; only retry when that failed
            if store.sync_error and not await store.refresh():
                raise click.ClickException(store.sync_error)
            console.print(f"Synced {len(store.entries)} entries")

    asyncio.run(_run())
