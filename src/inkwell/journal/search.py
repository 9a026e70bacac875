"""Filtered views over the entry collection.

Plain substring matching: the journal is small enough to scan on every
change, so there is no index to build or keep fresh.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .models import JournalEntry, Mood


@dataclass(frozen=True)
class EntryFilter:
    """Active predicates; empty ones match everything.

    Attributes:
        query: Case-insensitive substring of the title, body or any tag.
        mood: Exact mood match.
        tag: Exact tag membership.
    """

    query: str = ""
    mood: Mood | None = None
    tag: str | None = None

    @property
    def is_active(self) -> bool:
        return bool(self.query or self.mood or self.tag)

    def matches(self, entry: JournalEntry) -> bool:
        if self.query:
            needle = self.query.lower()
            if not (
                needle in entry.title.lower()
                or needle in entry.body.lower()
                or any(needle in tag.lower() for tag in entry.tags)
            ):
                return False
        if self.mood and entry.mood != self.mood:
            return False
        if self.tag and self.tag not in entry.tags:
            return False
        return True


def filter_entries(entries: Sequence[JournalEntry], entry_filter: EntryFilter) -> list[JournalEntry]:
    """Return the entries matching every active predicate, order preserved."""
    if not entry_filter.is_active:
        return list(entries)
    return [entry for entry in entries if entry_filter.matches(entry)]


def collect_tags(entries: Iterable[JournalEntry]) -> list[str]:
    """All distinct tags across *entries*, sorted."""
    return sorted({tag for entry in entries for tag in entry.tags})
