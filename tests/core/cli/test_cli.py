"""Tests for the CLI entry point."""

import json
import os

import pytest
from click.testing import CliRunner

from inkwell.core.cli import main


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, config_file, *args, input=None):
    return runner.invoke(main, ["--config", config_file, *args], input=input)


class TestCliGroup:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Inkwell" in result.output
        for command in ("new", "list", "show", "edit", "delete", "stats", "export", "import", "sync"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestEntryCommands:
    def test_new_then_list(self, runner, tmp_config_file):
        result = invoke(runner, tmp_config_file, "new", "-t", "Morning Walk", "-b", "cold and bright", "--tag", "Nature")
        assert result.exit_code == 0, result.output
        assert "Morning Walk" in result.output

        result = invoke(runner, tmp_config_file, "list")
        assert result.exit_code == 0
        assert "Morning Walk" in result.output
        assert "#nature" in result.output

    def test_new_without_title_is_untitled(self, runner, tmp_config_file):
        result = invoke(runner, tmp_config_file, "new", "-b", "just words")
        assert result.exit_code == 0
        assert "Untitled entry" in result.output

    def test_new_reads_body_from_stdin(self, runner, tmp_config_file):
        result = invoke(runner, tmp_config_file, "new", "-t", "Piped", "-b", "-", input="one two three\n")
        assert result.exit_code == 0
        assert "3 words" in result.output

    def test_list_filters(self, runner, tmp_config_file):
        invoke(runner, tmp_config_file, "new", "-t", "Calm day", "-m", "calm")
        invoke(runner, tmp_config_file, "new", "-t", "Big news", "-m", "excited")

        result = invoke(runner, tmp_config_file, "list", "--mood", "calm")
        assert "Calm day" in result.output
        assert "Big news" not in result.output

    def test_list_empty(self, runner, tmp_config_file):
        result = invoke(runner, tmp_config_file, "list")
        assert result.exit_code == 0
        assert "No entries" in result.output

    def test_show_edit_delete(self, runner, tmp_config_file, tmp_dir):
        invoke(runner, tmp_config_file, "new", "-t", "Draft", "-b", "first version")
        entry_id = _stored_entries(tmp_dir)[0]["id"]

        result = invoke(runner, tmp_config_file, "edit", entry_id[:8], "-b", "second longer version")
        assert result.exit_code == 0, result.output
        assert "3 words" in result.output

        result = invoke(runner, tmp_config_file, "show", entry_id[:8])
        assert result.exit_code == 0
        assert "second longer version" in result.output

        result = invoke(runner, tmp_config_file, "delete", entry_id, "--yes")
        assert result.exit_code == 0
        assert _stored_entries(tmp_dir) == []

    def test_show_unknown_entry(self, runner, tmp_config_file):
        result = invoke(runner, tmp_config_file, "show", "doesnotexist")
        assert result.exit_code == 1
        assert "No entry matches" in result.output

    def test_edit_without_changes(self, runner, tmp_config_file):
        result = invoke(runner, tmp_config_file, "edit", "abc")
        assert result.exit_code == 2
        assert "Nothing to change" in result.output


class TestStatsCommand:
    def test_stats(self, runner, tmp_config_file):
        invoke(runner, tmp_config_file, "new", "-t", "Today", "-b", "a b c d", "-m", "grateful")
        result = invoke(runner, tmp_config_file, "stats")
        assert result.exit_code == 0
        assert "Entries: 1" in result.output
        assert "Words: 4" in result.output
        assert "Streak: 1 days" in result.output
        assert "Most used mood: grateful" in result.output


class TestTransferCommands:
    def test_export_and_import(self, runner, tmp_config_file, tmp_dir):
        invoke(runner, tmp_config_file, "new", "-t", "Keep me")
        export_dir = os.path.join(tmp_dir, "backups")

        result = invoke(runner, tmp_config_file, "export", "-o", export_dir)
        assert result.exit_code == 0, result.output
        backups = os.listdir(export_dir)
        assert len(backups) == 1
        assert backups[0].startswith("journal-backup-")

        # same file again: every id already exists
        result = invoke(runner, tmp_config_file, "import", os.path.join(export_dir, backups[0]))
        assert result.exit_code == 0
        assert "Imported 0 new entries" in result.output

    def test_import_malformed(self, runner, tmp_config_file, tmp_dir):
        bad = os.path.join(tmp_dir, "bad.json")
        with open(bad, "w") as f:
            json.dump({"not": "a list"}, f)

        result = invoke(runner, tmp_config_file, "import", bad)
        assert result.exit_code == 1
        assert "Invalid format" in result.output


class TestSyncCommand:
    def test_local_only(self, runner, tmp_config_file):
        result = invoke(runner, tmp_config_file, "sync")
        assert result.exit_code == 0
        assert "nothing to sync" in result.output

    def test_bad_mode(self, runner, tmp_config_file, monkeypatch):
        monkeypatch.setenv("INKWELL_STORAGE__MODE", "cloud")
        result = invoke(runner, tmp_config_file, "list")
        assert result.exit_code == 1
        assert "Unknown storage.mode" in result.output


def _stored_entries(tmp_dir):
    path = os.path.join(tmp_dir, "data", "storage", "journal-entries")
    with open(path) as f:
        return json.load(f)
