"""Remote table as the record, scoped to the signed-in user.

There is no local cache: with nobody signed in the journal is empty and
no remote call is made. Imported entries get fresh ids from the backend,
so an import never collides with existing rows.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from ..auth import AuthProvider
from ..models import JournalEntry
from .base import PersistenceStrategy
from .table import RemoteEntryTable


class RemoteStrategy(PersistenceStrategy):
    name = "remote"
    merge_on_import = False

    def __init__(self, table: RemoteEntryTable, auth: AuthProvider):
        self._table = table
        self.auth = auth

    @property
    def has_remote(self) -> bool:  # type: ignore[override]
        return self.auth.current_user() is not None

    def _owned_table(self) -> RemoteEntryTable | None:
        user = self.auth.current_user()
        if user is None:
            return None
        return self._table.for_owner(user.id)

    async def fetch(self) -> list[JournalEntry]:
        table = self._owned_table()
        if table is None:
            return []
        return await table.fetch_all()

    async def push_create(self, entry: JournalEntry) -> None:
        table = self._owned_table()
        if table is not None:
            await table.insert(entry)

    async def push_update(self, entry: JournalEntry) -> None:
        table = self._owned_table()
        if table is not None:
            await table.update(entry)

    async def push_delete(self, entry_id: str) -> None:
        table = self._owned_table()
        if table is not None:
            await table.delete(entry_id)

    async def push_import(self, entries: Sequence[JournalEntry]) -> list[JournalEntry]:
        table = self._owned_table()
        if table is None:
            logger.debug("Import without a signed-in user stays local")
            return list(entries)
        if not entries:
            return []
        return await table.insert_fresh(entries)

    async def close(self) -> None:
        await self._table.close()
