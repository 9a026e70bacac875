"""EntryStore: the session's in-memory journal and its sync bookkeeping.

The store is the only thing that mutates the entry collection. Mutations
are synchronous and visible immediately; mirroring them to the
persistence strategy happens afterwards in background tasks. A failed
mirror never rolls anything back: it leaves a sticky ``sync_error`` until
the next successful remote call, and ``refresh()`` is the manual retry.

Example::

    store = EntryStore(LocalStrategy(LocalStorage("~/.inkwell-data/storage")))
    await store.load()
    entry = store.create_entry()
    store.update_entry(entry.id, title="Morning walk", body="Cold and bright.")
    await store.wait_for_sync()
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine, Sequence
from dataclasses import replace
from typing import Any

from loguru import logger

from inkwell.core.events import ENTRIES_CHANGED, SYNC_STATE_CHANGED, Event, EventBus
from inkwell.core.exceptions import SyncError

from .auth import AuthProvider
from .backends.base import PersistenceStrategy
from .models import (
    JournalEntry,
    JournalStats,
    JourneyInsights,
    Mood,
    count_words,
    create_entry as new_entry,
    normalize_tag,
    normalize_tags,
    normalize_title,
    now_ms,
    parse_mood,
    sort_entries,
)
from .search import EntryFilter, collect_tags, filter_entries
from .stats import compute_insights, compute_stats
from .transfer import export_json, parse_import

UPDATABLE_FIELDS = frozenset({"title", "body", "mood", "tags"})

FETCH_FAILED = "Unable to sync with the remote store. Showing cached entries."
CREATE_FAILED = "Failed to save entry to the remote store."
UPDATE_FAILED = "Failed to update entry on the remote store."
DELETE_FAILED = "Failed to delete entry on the remote store."
IMPORT_FAILED = "Failed to import entries to the remote store."


class EntryStore:
    """Owns the entry collection for one session.

    Args:
        strategy: Where mutations are mirrored.
        clock: Returns the current time in epoch milliseconds.
        events: Bus that receives change notifications. A private one is
            created when omitted.
    """

    def __init__(
        self,
        strategy: PersistenceStrategy,
        *,
        clock: Callable[[], int] = now_ms,
        events: EventBus | None = None,
    ):
        self.strategy = strategy
        self.events = events or EventBus()
        self._clock = clock
        self._entries: list[JournalEntry] = []
        self._selected_id: str | None = None
        self._ready = False

        self.search_query = ""
        self.filter_mood: Mood | None = None
        self.filter_tag: str | None = None

        self._syncing_count = 0
        self._sync_error: str | None = None
        self._pending: set[asyncio.Task] = set()
        self._snapshot_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def entries(self) -> tuple[JournalEntry, ...]:
        """The full collection, newest first."""
        return tuple(self._entries)

    @property
    def ready(self) -> bool:
        return self._ready

    def get(self, entry_id: str) -> JournalEntry | None:
        return next((entry for entry in self._entries if entry.id == entry_id), None)

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def selected_entry(self) -> JournalEntry | None:
        return self.get(self._selected_id) if self._selected_id else None

    def select(self, entry_id: str | None) -> None:
        self._selected_id = entry_id

    @property
    def entry_filter(self) -> EntryFilter:
        return EntryFilter(
            query=self.search_query,
            mood=parse_mood(self.filter_mood),
            tag=normalize_tag(self.filter_tag) if self.filter_tag else None,
        )

    @property
    def visible_entries(self) -> list[JournalEntry]:
        """Entries passing the current search query, mood and tag filters."""
        return filter_entries(self._entries, self.entry_filter)

    @property
    def all_tags(self) -> list[str]:
        return collect_tags(self._entries)

    @property
    def stats(self) -> JournalStats:
        return compute_stats(self._entries)

    @property
    def insights(self) -> JourneyInsights:
        return compute_insights(self._entries, now=self._clock())

    @property
    def syncing_count(self) -> int:
        return self._syncing_count

    @property
    def is_syncing(self) -> bool:
        return self._syncing_count > 0

    @property
    def sync_error(self) -> str | None:
        return self._sync_error

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Populate from the local snapshot, then from the remote if there is one.

        A remote that can't be reached leaves the cached entries in place and
        sets ``sync_error``; it never raises.
        """
        cached = await self.strategy.load_cached()
        self._set_entries(cached, reason="load")
        if self.strategy.has_remote:
            await self.refresh()
        self._ready = True
        logger.info(f"Journal loaded with {len(self._entries)} entries ({self.strategy.name})")

    async def refresh(self) -> bool:
        """Replace local state with the remote collection.

        The last response wins: there is no version check against edits
        made while the fetch was in flight.

        Returns:
            True on success, False if the remote failed (see ``sync_error``).
        """
        if not self.strategy.has_remote:
            return True

        self._begin_sync()
        try:
            remote_entries = await self.strategy.fetch()
        except Exception as exc:
            logger.error(f"Failed to fetch entries from {self.strategy.name} store: {exc}")
            self._set_sync_error(FETCH_FAILED)
            return False
        finally:
            self._end_sync()

        self._set_entries(remote_entries, reason="refresh")
        self._set_sync_error(None)
        self._schedule_snapshot()
        return True

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_entry(self) -> JournalEntry:
        """Insert a new empty entry at the head and select it."""
        entry = new_entry(now=self._clock())
        self._entries = sort_entries([entry, *self._entries])
        self._selected_id = entry.id
        self._changed("create")

        self._schedule_snapshot()
        self._schedule_remote(self.strategy.push_create(entry), CREATE_FAILED)
        return entry

    def update_entry(self, entry_id: str, **fields: Any) -> JournalEntry | None:
        """Merge *fields* into an entry.

        Accepted fields are ``title``, ``body``, ``mood`` and ``tags``. An
        unknown *entry_id* is ignored.

        Returns:
            The updated entry, or None if no entry has that id.

        Raises:
            ValueError: For a field outside the accepted set or an unknown mood.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        current = self.get(entry_id)
        if current is None:
            logger.debug(f"Ignoring update for unknown entry {entry_id}")
            return None

        changes: dict[str, Any] = {}
        if "title" in fields:
            changes["title"] = normalize_title(fields["title"] or "")
        if "body" in fields:
            changes["body"] = fields["body"] or ""
        if "mood" in fields:
            changes["mood"] = parse_mood(fields["mood"])
        if "tags" in fields:
            tags = fields["tags"] or ()
            changes["tags"] = normalize_tags([tags] if isinstance(tags, str) else tags)

        body = changes.get("body", current.body)
        updated = replace(
            current,
            **changes,
            word_count=count_words(body),
            updated_at=max(self._clock(), current.created_at),
        )
        self._entries = sort_entries(updated if entry.id == entry_id else entry for entry in self._entries)
        self._changed("update")

        self._schedule_snapshot()
        self._schedule_remote(self.strategy.push_update(updated), UPDATE_FAILED)
        return updated

    def delete_entry(self, entry_id: str) -> bool:
        """Remove an entry. Returns False if no entry has that id."""
        remaining = [entry for entry in self._entries if entry.id != entry_id]
        if len(remaining) == len(self._entries):
            logger.debug(f"Ignoring delete for unknown entry {entry_id}")
            return False

        self._entries = remaining
        if self._selected_id == entry_id:
            self._selected_id = None
        self._changed("delete")

        self._schedule_snapshot()
        self._schedule_remote(self.strategy.push_delete(entry_id), DELETE_FAILED)
        return True

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def export_entries(self) -> str:
        """The full collection as the portable JSON array."""
        return export_json(self._entries)

    async def import_json(self, text: str | bytes) -> int:
        """Validate and import an export file's contents.

        Raises:
            ImportFormatError: The text is not a JSON array of entries.
            SyncError: The remote rejected the import; nothing was applied.
        """
        return await self.import_entries(parse_import(text, now=self._clock()))

    async def import_entries(self, incoming: Sequence[JournalEntry]) -> int:
        """Add already-validated entries and return how many were new.

        In merge mode entries whose id already exists are skipped locally
        (the remote still upserts all of them). Otherwise the backend
        assigns fresh ids and every entry is added. With no remote to
        assign ids, the incoming ids are kept and merged.
        """
        assigns_ids = self.strategy.has_remote and not self.strategy.merge_on_import
        if self.strategy.has_remote and incoming:
            self._begin_sync()
            try:
                stored = await self.strategy.push_import(incoming)
            except Exception as exc:
                logger.error(f"Failed to import {len(incoming)} entries: {exc}")
                self._set_sync_error(IMPORT_FAILED)
                raise SyncError(IMPORT_FAILED) from exc
            finally:
                self._end_sync()
        else:
            stored = list(incoming)

        if not assigns_ids:
            existing = {entry.id for entry in self._entries}
            new_entries = []
            for entry in stored:
                if entry.id not in existing:
                    existing.add(entry.id)
                    new_entries.append(entry)
        else:
            new_entries = list(stored)

        if new_entries:
            self._entries = sort_entries([*new_entries, *self._entries])
            self._changed("import")
            self._schedule_snapshot()
        logger.info(f"Imported {len(new_entries)} of {len(incoming)} entries")
        return len(new_entries)

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    async def wait_for_sync(self) -> None:
        """Wait until every scheduled mirror task has settled."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def close(self) -> None:
        await self.wait_for_sync()
        await self.strategy.close()

    def clear(self) -> None:
        """Drop the in-memory collection (e.g. after sign-out). Nothing is mirrored."""
        self._entries = []
        self._selected_id = None
        self._changed("clear")

    async def sign_out(self, auth: AuthProvider) -> None:
        """Let pending syncs settle, sign out, and forget the user's entries."""
        await self.wait_for_sync()
        await auth.sign_out()
        self.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _set_entries(self, entries: Sequence[JournalEntry], reason: str) -> None:
        deduped: dict[str, JournalEntry] = {}
        for entry in entries:
            deduped.setdefault(entry.id, entry)
        self._entries = sort_entries(deduped.values())
        if self._selected_id and self._selected_id not in deduped:
            self._selected_id = None
        self._changed(reason)

    def _changed(self, reason: str) -> None:
        self.events.emit_sync(
            Event(name=ENTRIES_CHANGED, payload={"reason": reason, "count": len(self._entries)}, source="store")
        )

    def _begin_sync(self) -> None:
        self._syncing_count += 1
        self._sync_state_changed()

    def _end_sync(self) -> None:
        self._syncing_count = max(0, self._syncing_count - 1)
        self._sync_state_changed()

    def _set_sync_error(self, message: str | None) -> None:
        if message != self._sync_error:
            self._sync_error = message
            self._sync_state_changed()

    def _sync_state_changed(self) -> None:
        self.events.emit_sync(
            Event(
                name=SYNC_STATE_CHANGED,
                payload={"syncing": self._syncing_count, "error": self._sync_error},
                source="store",
            )
        )

    def _schedule_snapshot(self) -> None:
        self._schedule(self._write_snapshot())

    async def _write_snapshot(self) -> None:
        # serialized, and always the state at write time, so the last write wins
        try:
            async with self._snapshot_lock:
                await self.strategy.save_snapshot(list(self._entries))
        except Exception as exc:
            logger.error(f"Failed to write local journal snapshot: {exc}")

    def _schedule_remote(self, operation: Coroutine[Any, Any, Any], failure_message: str) -> None:
        if not self.strategy.has_remote:
            operation.close()
            return
        # counted before the call is even scheduled, so is_syncing is true at once
        self._begin_sync()
        self._schedule(self._mirror(operation, failure_message))

    async def _mirror(self, operation: Coroutine[Any, Any, Any], failure_message: str) -> None:
        try:
            await operation
        except Exception as exc:
            logger.error(f"{failure_message} ({exc})")
            self._set_sync_error(failure_message)
        else:
            self._set_sync_error(None)
        finally:
            self._end_sync()

    def _schedule(self, coro: Coroutine[Any, Any, None]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop (plain sync caller): run the mirror to completion now
            asyncio.run(coro)
            return
        task = loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
