"""Local snapshot with best-effort mirroring to a remote table.

The local slot is written on every change and is what the store falls
back to when the remote table can't be reached. Imports are upserted by
id, so re-importing a backup is idempotent on the remote side.
"""

from __future__ import annotations

from collections.abc import Sequence

from inkwell.core.storage import StorageBackend

from ..models import JournalEntry
from .base import PersistenceStrategy, SnapshotSlot
from .table import RemoteEntryTable


class SyncedStrategy(PersistenceStrategy):
    name = "synced"
    has_remote = True
    merge_on_import = True

    def __init__(self, storage: StorageBackend, table: RemoteEntryTable, key: str = "journal-entries"):
        self.slot = SnapshotSlot(storage, key)
        self.table = table

    async def load_cached(self) -> list[JournalEntry]:
        return await self.slot.read()

    async def fetch(self) -> list[JournalEntry]:
        return await self.table.fetch_all()

    async def save_snapshot(self, entries: Sequence[JournalEntry]) -> None:
        await self.slot.write(entries)

    async def push_create(self, entry: JournalEntry) -> None:
        await self.table.insert(entry)

    async def push_update(self, entry: JournalEntry) -> None:
        await self.table.update(entry)

    async def push_delete(self, entry_id: str) -> None:
        await self.table.delete(entry_id)

    async def push_import(self, entries: Sequence[JournalEntry]) -> list[JournalEntry]:
        if not entries:
            return []
        return await self.table.upsert_many(entries)

    async def close(self) -> None:
        await self.table.close()
