"""JSON export and import of journal entries.

The export format is a JSON array of camelCase entry records; import
accepts exactly that shape, so an export always imports back unchanged.
Validation is all-or-nothing: one bad record rejects the whole file.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from datetime import date
from pathlib import Path
from typing import Any

import aiofiles
from loguru import logger

from inkwell.core.exceptions import ImportFormatError

from .models import JournalEntry, entry_to_dict, hydrate_entry


def backup_filename(today: date | None = None) -> str:
    """Name of a backup file, stamped with the current date."""
    return f"journal-backup-{(today or date.today()).isoformat()}.json"


def export_json(entries: Sequence[JournalEntry]) -> str:
    """Serialize the collection to the portable JSON array."""
    return json.dumps([entry_to_dict(entry) for entry in entries], indent=2, ensure_ascii=False)


def parse_records(data: Any, now: int | None = None) -> list[JournalEntry]:
    """Hydrate already-decoded import data.

    Raises:
        ImportFormatError: If *data* is not a list of entry-shaped mappings.
    """
    if not isinstance(data, list):
        raise ImportFormatError("Invalid format: expected a JSON array of entries")

    entries = []
    for index, record in enumerate(data):
        if not isinstance(record, Mapping):
            raise ImportFormatError(f"Invalid format: item {index} is not an entry object")
        try:
            entries.append(hydrate_entry(record, now=now))
        except ValueError as exc:
            raise ImportFormatError(f"Invalid format: item {index}: {exc}") from exc
    return entries


def parse_import(text: str | bytes, now: int | None = None) -> list[JournalEntry]:
    """Decode and hydrate an export file's contents."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ImportFormatError(f"Invalid file format: {exc.msg}") from exc
    return parse_records(data, now=now)


async def write_backup(entries: Sequence[JournalEntry], directory: str | Path, today: date | None = None) -> Path:
    """Write an export file into *directory* and return its path."""
    target_dir = Path(directory).expanduser()
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / backup_filename(today)

    async with aiofiles.open(path, "w", encoding="utf-8") as f:
        await f.write(export_json(entries))
    logger.info(f"Exported {len(entries)} entries to {path}")
    return path


async def read_backup(path: str | Path) -> list[JournalEntry]:
    """Read and validate an export file."""
    async with aiofiles.open(Path(path).expanduser(), encoding="utf-8") as f:
        text = await f.read()
    return parse_import(text)
