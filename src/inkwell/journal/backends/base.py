"""PersistenceStrategy: the contract every journal backend satisfies.

The entry store owns the in-memory collection; a strategy only mirrors it.
Local strategies keep a snapshot of the whole collection in a key-value
slot, remote ones mirror individual rows. A strategy may do both.
"""

from __future__ import annotations

import json
from abc import ABC
from collections.abc import Sequence

from loguru import logger

from inkwell.core.storage import StorageBackend, StorageKeyError

from ..models import JournalEntry, entry_to_dict
from ..transfer import parse_records


class PersistenceStrategy(ABC):
    """Base strategy. Every hook defaults to "nothing to do".

    Attributes:
        has_remote: Remote calls are made; the store tracks them as syncs.
        merge_on_import: Imports keep their ids and skip ones already present.
            When False the backend assigns fresh ids and everything is inserted.
    """

    name = "base"
    has_remote = False
    merge_on_import = True

    async def load_cached(self) -> list[JournalEntry]:
        """Best local snapshot, empty when there is none."""
        return []

    async def fetch(self) -> list[JournalEntry]:
        """Remote collection of record, newest first."""
        return []

    async def save_snapshot(self, entries: Sequence[JournalEntry]) -> None:
        """Persist the full collection locally."""

    async def push_create(self, entry: JournalEntry) -> None:
        """Mirror a newly created entry."""

    async def push_update(self, entry: JournalEntry) -> None:
        """Mirror an updated entry."""

    async def push_delete(self, entry_id: str) -> None:
        """Mirror a deletion."""

    async def push_import(self, entries: Sequence[JournalEntry]) -> list[JournalEntry]:
        """Mirror a bulk import; returns the entries as stored."""
        return list(entries)

    async def close(self) -> None:
        """Release connections."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(remote={self.has_remote})"


class SnapshotSlot:
    """The whole collection as JSON under one storage key."""

    def __init__(self, storage: StorageBackend, key: str = "journal-entries"):
        self.storage = storage
        self.key = key

    async def read(self) -> list[JournalEntry]:
        """Read the snapshot. A missing or corrupt slot reads as empty."""
        try:
            raw = await self.storage.load(self.key)
        except StorageKeyError:
            return []

        try:
            return parse_records(json.loads(raw))
        except ValueError as exc:
            logger.warning(f"Ignoring unreadable journal snapshot '{self.key}': {exc}")
            return []

    async def write(self, entries: Sequence[JournalEntry]) -> None:
        data = json.dumps([entry_to_dict(entry) for entry in entries], ensure_ascii=False)
        await self.storage.save(self.key, data.encode("utf-8"), content_type="application/json")
