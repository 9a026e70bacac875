"""Aggregate statistics over a journal.

Both functions are pure: they read an entry collection and a reference
time, and never touch the store.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import date, datetime, timedelta

from .models import JournalEntry, JournalStats, JourneyInsights, Mood, now_ms

_HOUR_MS = 60 * 60 * 1000
_WEEK_MS = 7 * 24 * _HOUR_MS


def local_day(timestamp_ms: int) -> date:
    """Calendar day of an epoch-millisecond timestamp in local time."""
    return datetime.fromtimestamp(timestamp_ms / 1000).date()


def compute_streak(entries: Sequence[JournalEntry], today: date | None = None) -> int:
    """Count consecutive days with an entry, ending today.

    No entry today means no streak, however long the run before it.
    """
    today = today or date.today()
    days = {local_day(entry.created_at) for entry in entries}

    streak = 0
    expected = today
    while expected in days:
        streak += 1
        expected -= timedelta(days=1)
    return streak


def compute_stats(entries: Sequence[JournalEntry], today: date | None = None) -> JournalStats:
    """Compute totals, the mood histogram and the current streak.

    Args:
        entries: The entry collection, in any order.
        today: Reference day for the streak. Defaults to the local date.

    Returns:
        JournalStats with every mood present in ``mood_counts``.
    """
    mood_counts = {mood: 0 for mood in Mood}
    total_words = 0
    for entry in entries:
        total_words += entry.word_count
        if entry.mood is not None:
            mood_counts[entry.mood] += 1

    # max() keeps the first maximum, i.e. declaration order wins ties
    top_mood = max(Mood, key=lambda mood: mood_counts[mood])
    most_used = top_mood if mood_counts[top_mood] > 0 else None

    return JournalStats(
        total_entries=len(entries),
        total_words=total_words,
        streak_days=compute_streak(entries, today),
        most_used_mood=most_used,
        mood_counts=mood_counts,
    )


def compute_insights(entries: Sequence[JournalEntry], now: int | None = None) -> JourneyInsights:
    """Weekly word total, the most used tag and time since the newest entry.

    ``entries`` is expected newest-first, as the store keeps it.
    """
    now = now_ms() if now is None else now
    week_ago = now - _WEEK_MS

    weekly_words = sum(entry.word_count for entry in entries if entry.created_at >= week_ago)

    tag_counts: Counter[str] = Counter()
    for entry in entries:
        tag_counts.update(entry.tags)
    trending = tag_counts.most_common(1)[0][0] if tag_counts else None

    hours = None
    if entries:
        hours = max(1, round((now - entries[0].updated_at) / _HOUR_MS))

    return JourneyInsights(weekly_words=weekly_words, trending_tag=trending, hours_since_last_entry=hours)
