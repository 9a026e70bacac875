"""Core data models for the journal.

Entries are immutable snapshots: the store replaces an entry with an
updated copy rather than mutating it, so a snapshot handed to a
background sync can never change underneath it.
"""

from __future__ import annotations

import re
import time
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

UNTITLED = "Untitled entry"

_TAG_STRIP_RE = re.compile(r"[^a-z0-9-]")


class Mood(StrEnum):
    """Moods an entry can carry. Declaration order breaks ties in stats."""

    HAPPY = "happy"
    CALM = "calm"
    SAD = "sad"
    ANXIOUS = "anxious"
    EXCITED = "excited"
    GRATEFUL = "grateful"


@dataclass(frozen=True)
class JournalEntry:
    """One diary record.

    Attributes:
        id: Opaque unique identifier, fixed at creation.
        title: Free text title.
        body: Free text content.
        mood: Optional mood; None means unset.
        tags: Lowercase slugs, deduplicated, first-occurrence order.
        created_at: Creation time in epoch milliseconds.
        updated_at: Last mutation time in epoch milliseconds.
        word_count: Whitespace token count of the trimmed body.
    """

    id: str
    title: str = ""
    body: str = ""
    mood: Mood | None = None
    tags: tuple[str, ...] = ()
    created_at: int = 0
    updated_at: int = 0
    word_count: int = 0

    def __repr__(self) -> str:
        title = self.title or "(untitled)"
        return f"JournalEntry(id='{self.id}', title='{title[:40]}', words={self.word_count})"


@dataclass(frozen=True)
class JournalStats:
    """Aggregate statistics over an entry collection."""

    total_entries: int = 0
    total_words: int = 0
    streak_days: int = 0
    most_used_mood: Mood | None = None
    mood_counts: dict[Mood, int] = field(default_factory=lambda: {mood: 0 for mood in Mood})


@dataclass(frozen=True)
class JourneyInsights:
    """Short-horizon writing insights shown next to the stats."""

    weekly_words: int = 0
    trending_tag: str | None = None
    hours_since_last_entry: int | None = None


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def generate_id() -> str:
    return uuid.uuid4().hex


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens after trimming."""
    return len(text.split())


def normalize_title(title: str) -> str:
    return title.strip() or UNTITLED


def normalize_tag(tag: str) -> str:
    """Lowercase *tag* and strip everything but ``a-z``, ``0-9`` and ``-``."""
    return _TAG_STRIP_RE.sub("", tag.strip().lower())


def normalize_tags(tags: Iterable[str]) -> tuple[str, ...]:
    """Normalize each tag, dropping empties and duplicates (first one wins)."""
    seen: dict[str, None] = {}
    for tag in tags:
        slug = normalize_tag(str(tag))
        if slug:
            seen.setdefault(slug, None)
    return tuple(seen)


def parse_mood(value: Mood | str | None) -> Mood | None:
    """Coerce *value* to a Mood. Empty values mean unset.

    Raises:
        ValueError: If *value* names no known mood.
    """
    if value is None or value == "":
        return None
    return Mood(value)


def create_entry(now: int | None = None) -> JournalEntry:
    """Build a new, empty entry stamped with *now*."""
    stamp = now_ms() if now is None else now
    return JournalEntry(id=generate_id(), created_at=stamp, updated_at=stamp)


# ---------------------------------------------------------------------------
# Serialization (camelCase, the export/import wire shape)
# ---------------------------------------------------------------------------


def entry_to_dict(entry: JournalEntry) -> dict[str, Any]:
    """Serialize an entry to its portable camelCase form."""
    return {
        "id": entry.id,
        "title": entry.title,
        "body": entry.body,
        "mood": entry.mood.value if entry.mood else None,
        "tags": list(entry.tags),
        "createdAt": entry.created_at,
        "updatedAt": entry.updated_at,
        "wordCount": entry.word_count,
    }


def hydrate_entry(record: Mapping[str, Any], now: int | None = None) -> JournalEntry:
    """Build an entry from a possibly partial record, filling defaults.

    Missing ``id`` gets a fresh one, missing timestamps fall back to
    ``createdAt`` or *now*, and a missing ``wordCount`` is recomputed from
    the body. Tags are normalized like UI input (a no-op on exported
    tags) and ``updatedAt`` is never earlier than ``createdAt``.

    Raises:
        ValueError: If a present field has the wrong type or an unknown mood.
    """
    stamp = now_ms() if now is None else now

    body = record.get("body")
    body = "" if body is None else body
    title = record.get("title")
    title = "" if title is None else title
    if not isinstance(body, str) or not isinstance(title, str):
        raise ValueError("title and body must be strings")

    tags = record.get("tags")
    if tags is None:
        tags = []
    if not isinstance(tags, list | tuple):
        raise ValueError("tags must be a list")

    created_at = _as_millis(record.get("createdAt"), "createdAt", stamp)
    updated_at = max(_as_millis(record.get("updatedAt"), "updatedAt", created_at), created_at)

    word_count = record.get("wordCount")
    if word_count is None:
        word_count = count_words(body)
    elif isinstance(word_count, bool) or not isinstance(word_count, int):
        raise ValueError("wordCount must be an integer")

    entry_id = record.get("id")
    if entry_id is None or entry_id == "":
        entry_id = generate_id()

    return JournalEntry(
        id=str(entry_id),
        title=title,
        body=body,
        mood=parse_mood(record.get("mood")),
        tags=normalize_tags(tags),
        created_at=created_at,
        updated_at=updated_at,
        word_count=word_count,
    )


def _as_millis(value: Any, name: str, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError(f"{name} must be epoch milliseconds")
    return int(value)


def sort_entries(entries: Iterable[JournalEntry]) -> list[JournalEntry]:
    """Order entries newest-first by creation time (stable)."""
    return sorted(entries, key=lambda entry: entry.created_at, reverse=True)
