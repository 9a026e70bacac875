"""Local-only persistence: the snapshot slot is the record."""

from __future__ import annotations

from collections.abc import Sequence

from inkwell.core.storage import StorageBackend

from ..models import JournalEntry
from .base import PersistenceStrategy, SnapshotSlot


class LocalStrategy(PersistenceStrategy):
    """Keep everything in a local key-value slot. No remote calls."""

    name = "local"

    def __init__(self, storage: StorageBackend, key: str = "journal-entries"):
        self.slot = SnapshotSlot(storage, key)

    async def load_cached(self) -> list[JournalEntry]:
        return await self.slot.read()

    async def save_snapshot(self, entries: Sequence[JournalEntry]) -> None:
        await self.slot.write(entries)
