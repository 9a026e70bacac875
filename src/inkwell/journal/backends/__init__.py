"""Persistence strategies for the journal.

One interface, three policies, picked once at startup by ``create_strategy``:

- ``local``: a key-value slot on disk is the record.
- ``synced``: the local slot plus a best-effort mirror to a remote table.
- ``remote``: the remote table is the record, rows scoped to the signed-in user.
"""

from __future__ import annotations

from loguru import logger

from inkwell.core.config import Config
from inkwell.core.storage import LocalStorage

from ..auth import AuthProvider, AuthUser, StaticAuthProvider
from ..config import JournalConfig, StorageMode
from .base import PersistenceStrategy, SnapshotSlot
from .local import LocalStrategy
from .remote import RemoteStrategy
from .synced import SyncedStrategy
from .table import EntryDatabase, JournalEntryRow, RemoteEntryTable


def create_strategy(
    config: Config | JournalConfig,
    auth: AuthProvider | None = None,
) -> PersistenceStrategy:
    """Build the strategy selected by configuration.

    Args:
        config: Application config or an already-typed JournalConfig.
        auth: Identity source for remote mode. Defaults to the configured
            ``auth.user_id``, or nobody when that is empty.

    Raises:
        ConfigurationError: Unknown mode, or a remote mode without ``remote.url``.
    """
    journal_config = config if isinstance(config, JournalConfig) else JournalConfig.from_config(config)
    mode = journal_config.mode
    logger.debug(f"Using '{mode}' journal persistence")

    if mode == StorageMode.LOCAL:
        return LocalStrategy(LocalStorage(journal_config.storage_dir), key=journal_config.storage_key)

    table = RemoteEntryTable(EntryDatabase(journal_config.remote_url))
    if mode == StorageMode.SYNCED:
        return SyncedStrategy(LocalStorage(journal_config.storage_dir), table, key=journal_config.storage_key)

    if auth is None:
        user = AuthUser(id=journal_config.user_id, email=journal_config.email) if journal_config.user_id else None
        auth = StaticAuthProvider(user)
    return RemoteStrategy(table, auth)


__all__ = [
    "EntryDatabase",
    "JournalEntryRow",
    "LocalStrategy",
    "PersistenceStrategy",
    "RemoteEntryTable",
    "RemoteStrategy",
    "SnapshotSlot",
    "SyncedStrategy",
    "create_strategy",
]
