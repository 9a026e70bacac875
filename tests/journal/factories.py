"""Entry builders and a controllable clock for journal tests."""

from datetime import date, datetime, time, timedelta

from inkwell.journal.models import JournalEntry, count_words


def local_ms(day: date, hour: int = 12) -> int:
    """Epoch milliseconds for *hour* o'clock local time on *day*."""
    return int(datetime.combine(day, time(hour)).timestamp() * 1000)


def days_ago(n: int, hour: int = 12) -> int:
    return local_ms(date.today() - timedelta(days=n), hour)


def make_entry(
    entry_id: str,
    title: str = "",
    body: str = "",
    mood=None,
    tags: tuple[str, ...] = (),
    created_at: int | None = None,
    updated_at: int | None = None,
) -> JournalEntry:
    created = days_ago(0) if created_at is None else created_at
    return JournalEntry(
        id=entry_id,
        title=title,
        body=body,
        mood=mood,
        tags=tuple(tags),
        created_at=created,
        updated_at=created if updated_at is None else updated_at,
        word_count=count_words(body),
    )


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int = 1000) -> int:
        self.now += ms
        return self.now
