"""Tests for inkwell.journal.models."""

from dataclasses import FrozenInstanceError

import pytest

from inkwell.journal.models import (
    UNTITLED,
    JournalEntry,
    Mood,
    count_words,
    create_entry,
    entry_to_dict,
    hydrate_entry,
    normalize_tag,
    normalize_tags,
    normalize_title,
    parse_mood,
    sort_entries,
)


class TestCountWords:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("", 0),
            ("   ", 0),
            ("one", 1),
            ("  two  words ", 2),
            ("tabs\tand\nnewlines  too", 4),
        ],
    )
    def test_counts(self, text, expected):
        assert count_words(text) == expected


class TestNormalization:
    def test_title_trimmed(self):
        assert normalize_title("  Morning Walk ") == "Morning Walk"

    def test_blank_title_becomes_untitled(self):
        assert normalize_title("   ") == UNTITLED
        assert normalize_title("") == "Untitled entry"

    def test_tag_slug(self):
        assert normalize_tag("  Self Care! ") == "selfcare"
        assert normalize_tag("deep-work_2") == "deep-work2"

    def test_tags_deduplicated_in_order(self):
        assert normalize_tags(["Nature", "nature", "", "!!", "walk", "NATURE"]) == ("nature", "walk")

    def test_parse_mood(self):
        assert parse_mood("calm") is Mood.CALM
        assert parse_mood(Mood.SAD) is Mood.SAD
        assert parse_mood(None) is None
        assert parse_mood("") is None

    def test_parse_mood_unknown(self):
        with pytest.raises(ValueError):
            parse_mood("furious")


class TestJournalEntry:
    def test_create_entry_is_empty(self):
        entry = create_entry(now=1000)
        assert entry.title == ""
        assert entry.body == ""
        assert entry.mood is None
        assert entry.tags == ()
        assert entry.created_at == entry.updated_at == 1000
        assert entry.word_count == 0

    def test_ids_unique(self):
        assert create_entry().id != create_entry().id

    def test_frozen(self):
        entry = create_entry()
        with pytest.raises(FrozenInstanceError):
            entry.title = "changed"  # type: ignore[misc]

    def test_repr(self):
        entry = JournalEntry(id="abc", title="Hello")
        assert "abc" in repr(entry)
        assert "Hello" in repr(entry)

    def test_mood_declaration_order(self):
        assert [m.value for m in Mood] == ["happy", "calm", "sad", "anxious", "excited", "grateful"]

    def test_sort_newest_first_stable(self):
        a = JournalEntry(id="a", created_at=1)
        b = JournalEntry(id="b", created_at=2)
        c = JournalEntry(id="c", created_at=2)
        assert [e.id for e in sort_entries([a, b, c])] == ["b", "c", "a"]


class TestSerialization:
    def test_to_dict_camel_case(self):
        entry = JournalEntry(
            id="x1", title="T", body="one two", mood=Mood.HAPPY, tags=("a",), created_at=5, updated_at=6, word_count=2
        )
        assert entry_to_dict(entry) == {
            "id": "x1",
            "title": "T",
            "body": "one two",
            "mood": "happy",
            "tags": ["a"],
            "createdAt": 5,
            "updatedAt": 6,
            "wordCount": 2,
        }

    def test_hydrate_fills_defaults(self):
        entry = hydrate_entry({"body": "three little words"}, now=42)
        assert entry.id
        assert entry.title == ""
        assert entry.mood is None
        assert entry.tags == ()
        assert entry.created_at == 42
        assert entry.updated_at == 42
        assert entry.word_count == 3

    def test_hydrate_updated_defaults_to_created(self):
        entry = hydrate_entry({"id": "a", "createdAt": 100}, now=999)
        assert entry.updated_at == 100

    def test_hydrate_keeps_given_word_count(self):
        entry = hydrate_entry({"id": "a", "body": "one two", "wordCount": 7})
        assert entry.word_count == 7

    def test_hydrate_null_mood(self):
        assert hydrate_entry({"id": "a", "mood": None}).mood is None

    @pytest.mark.parametrize(
        "record",
        [
            {"body": 12},
            {"title": ["x"]},
            {"tags": "a,b"},
            {"mood": "furious"},
            {"createdAt": "yesterday"},
            {"wordCount": "3"},
        ],
    )
    def test_hydrate_rejects_bad_fields(self, record):
        with pytest.raises(ValueError):
            hydrate_entry(record)

    def test_hydrate_normalizes_tags(self):
        entry = hydrate_entry({"id": "a", "tags": ["Foo Bar", "x", "x", "!!"]})
        assert entry.tags == ("foobar", "x")

    def test_hydrate_keeps_clean_tags(self):
        assert hydrate_entry({"id": "a", "tags": ["nature", "deep-work"]}).tags == ("nature", "deep-work")

    def test_hydrate_updated_never_before_created(self):
        entry = hydrate_entry({"id": "a", "createdAt": 2000, "updatedAt": 1000})
        assert entry.created_at == 2000
        assert entry.updated_at == 2000
