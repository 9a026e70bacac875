"""Tests for the remote entry table on an in-memory SQLite database."""

from dataclasses import replace

import pytest
from factories import make_entry

from inkwell.journal.models import Mood


class TestRemoteEntryTable:
    @pytest.mark.asyncio
    async def test_insert_and_fetch(self, table):
        entry = make_entry("a", title="Morning Walk", body="cold air", mood=Mood.CALM, tags=("nature",))
        await table.insert(entry)
        assert await table.fetch_all() == [entry]

    @pytest.mark.asyncio
    async def test_fetch_newest_first(self, table):
        await table.insert(make_entry("old", created_at=1_000))
        await table.insert(make_entry("new", created_at=3_000))
        await table.insert(make_entry("mid", created_at=2_000))
        assert [e.id for e in await table.fetch_all()] == ["new", "mid", "old"]

    @pytest.mark.asyncio
    async def test_update(self, table):
        entry = make_entry("a", body="first")
        await table.insert(entry)
        changed = replace(entry, title="Edited", body="two words", word_count=2, mood=Mood.SAD, updated_at=99)

        assert await table.update(changed) is True
        assert await table.fetch_all() == [changed]

    @pytest.mark.asyncio
    async def test_update_missing_row(self, table):
        assert await table.update(make_entry("ghost")) is False

    @pytest.mark.asyncio
    async def test_delete(self, table):
        await table.insert(make_entry("a"))
        assert await table.delete("a") is True
        assert await table.delete("a") is False
        assert await table.fetch_all() == []

    @pytest.mark.asyncio
    async def test_delete_uses_sqlmodel_exec(self, table, recwarn):
        await table.insert(make_entry("a"))
        assert await table.delete("a") is True
        assert not [w for w in recwarn if "session.exec()" in str(w.message)]

    @pytest.mark.asyncio
    async def test_upsert_many(self, table):
        original = make_entry("a", title="before", created_at=1_000)
        await table.insert(original)

        incoming = [replace(original, title="after"), make_entry("b", created_at=2_000)]
        await table.upsert_many(incoming)
        await table.upsert_many(incoming)

        rows = await table.fetch_all()
        assert [e.id for e in rows] == ["b", "a"]
        assert rows[1].title == "after"

    @pytest.mark.asyncio
    async def test_insert_fresh_assigns_new_ids(self, table):
        await table.insert(make_entry("a", title="existing"))
        stored = await table.insert_fresh([make_entry("a", title="copy")])

        assert len(stored) == 1
        assert stored[0].id != "a"
        assert stored[0].title == "copy"
        assert {e.id for e in await table.fetch_all()} == {"a", stored[0].id}


class TestOwnerScoping:
    @pytest.mark.asyncio
    async def test_rows_visible_to_owner_only(self, table):
        alice = table.for_owner("alice")
        bob = table.for_owner("bob")
        await alice.insert(make_entry("a1"))
        await bob.insert(make_entry("b1"))

        assert [e.id for e in await alice.fetch_all()] == ["a1"]
        assert [e.id for e in await bob.fetch_all()] == ["b1"]

    @pytest.mark.asyncio
    async def test_cannot_touch_other_owners_rows(self, table):
        alice = table.for_owner("alice")
        bob = table.for_owner("bob")
        entry = make_entry("a1", title="private")
        await alice.insert(entry)

        assert await bob.update(replace(entry, title="hijacked")) is False
        assert await bob.delete("a1") is False
        assert (await alice.fetch_all())[0].title == "private"

    @pytest.mark.asyncio
    async def test_fresh_ids_are_owned(self, table):
        alice = table.for_owner("alice")
        await alice.insert_fresh([make_entry("x"), make_entry("y")])
        assert len(await alice.fetch_all()) == 2
        assert await table.for_owner("bob").fetch_all() == []
