"""Journal entries, their statistics, and where they are persisted.

Provides the entry model, the session-owned EntryStore, pure stats and
filter functions, JSON transfer, and pluggable persistence strategies.
"""

from .auth import AuthProvider, AuthUser, StaticAuthProvider
from .backends import LocalStrategy, PersistenceStrategy, RemoteStrategy, SyncedStrategy, create_strategy
from .config import JournalConfig, StorageMode
from .models import JournalEntry, JournalStats, JourneyInsights, Mood
from .search import EntryFilter, collect_tags, filter_entries
from .stats import compute_insights, compute_stats
from .store import EntryStore

__all__ = [
    "AuthProvider",
    "AuthUser",
    "EntryFilter",
    "EntryStore",
    "JournalConfig",
    "JournalEntry",
    "JournalStats",
    "JourneyInsights",
    "LocalStrategy",
    "Mood",
    "PersistenceStrategy",
    "RemoteStrategy",
    "StaticAuthProvider",
    "StorageMode",
    "SyncedStrategy",
    "collect_tags",
    "compute_insights",
    "compute_stats",
    "create_strategy",
    "filter_entries",
]
