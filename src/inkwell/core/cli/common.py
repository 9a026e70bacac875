"""Shared setup logic for CLI commands."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import click
from rich.console import Console

from inkwell.core.config import Config
from inkwell.core.exceptions import ConfigurationError
from inkwell.core.utils.logging import setup_logging

INKWELL_DIR = Path.home() / ".inkwell"
CONFIG_PATH = INKWELL_DIR / "config.yaml"

console = Console()


def load_config(ctx: click.Context) -> Config:
    """Load config from --config, or ~/.inkwell/config.yaml when present."""
    config_path = (ctx.obj or {}).get("config_path") or str(CONFIG_PATH)
    config = Config(config_file=config_path)
    setup_logging(level=config.get("logging.level", "WARNING"), log_file=config.get_path("logging.file"))
    return config


@asynccontextmanager
async def open_store(config: Config) -> AsyncIterator:
    """Build the configured strategy, load the journal, and close it afterwards."""
    from inkwell.journal import EntryStore, create_strategy

    try:
        strategy = create_strategy(config)
    except ConfigurationError as exc:
        raise click.ClickException(f"Configuration error: {exc}") from exc

    store = EntryStore(strategy)
    await store.load()
    try:
        yield store
    finally:
        await store.close()
        if store.sync_error:
            console.print(f"[yellow]Sync warning:[/yellow] {store.sync_error} Run 'inkwell sync' to retry.")


def resolve_entry(store, entry_ref: str):
    """Find an entry by id or unique id prefix."""
    matches = [entry for entry in store.entries if entry.id.startswith(entry_ref)]
    if not matches:
        raise click.ClickException(f"No entry matches '{entry_ref}'.")
    if len(matches) > 1:
        raise click.ClickException(f"'{entry_ref}' matches {len(matches)} entries; use more characters.")
    return matches[0]
