"""Typed journal settings.

A pure data container read from the hierarchical Config; the strategy
factory consumes it instead of poking at dotted keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from inkwell.core.config import Config
from inkwell.core.exceptions import ConfigurationError


class StorageMode(StrEnum):
    """Where entries are persisted."""

    LOCAL = "local"  # local slot only
    SYNCED = "synced"  # local slot + best-effort remote mirror
    REMOTE = "remote"  # remote table is the record, scoped per user


@dataclass
class JournalConfig:
    """Settings for persistence.

    Attributes:
        mode: Which persistence strategy to build.
        storage_dir: Directory holding the local slot.
        storage_key: Slot key for the serialized collection.
        remote_url: Async SQLAlchemy URL of the remote table's database.
        export_dir: Default directory for backup files.
        user_id: Identity used to scope rows in remote mode.
        email: Display address for that identity.
    """

    mode: StorageMode = StorageMode.LOCAL
    storage_dir: str = "~/.inkwell-data/storage"
    storage_key: str = "journal-entries"
    remote_url: str = ""
    export_dir: str = "~/.inkwell-data/exports"
    user_id: str = ""
    email: str = ""

    @classmethod
    def from_config(cls, config: Config) -> JournalConfig:
        raw_mode = str(config.get("storage.mode", StorageMode.LOCAL)).strip().lower()
        try:
            mode = StorageMode(raw_mode)
        except ValueError:
            choices = ", ".join(m.value for m in StorageMode)
            raise ConfigurationError(f"Unknown storage.mode '{raw_mode}' (expected one of: {choices})") from None

        journal_config = cls(
            mode=mode,
            storage_dir=config.get("paths.storage_dir", cls.storage_dir),
            storage_key=config.get("storage.key", cls.storage_key) or cls.storage_key,
            remote_url=config.get("remote.url", "") or "",
            export_dir=config.get("paths.export_dir", cls.export_dir),
            user_id=str(config.get("auth.user_id", "") or ""),
            email=str(config.get("auth.email", "") or ""),
        )
        if mode != StorageMode.LOCAL and not journal_config.remote_url:
            raise ConfigurationError(f"storage.mode '{mode}' requires remote.url")
        return journal_config
