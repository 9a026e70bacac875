"""Tests for inkwell.journal.config."""

import pytest

from inkwell.core.config import Config
from inkwell.core.exceptions import ConfigurationError
from inkwell.journal.config import JournalConfig, StorageMode


def _config(tmp_path, **overrides) -> Config:
    config = Config(data_dir=str(tmp_path / "data"))
    for key, value in overrides.items():
        config.set(key.replace("__", "."), value)
    return config


class TestJournalConfig:
    def test_defaults_are_local(self, tmp_path):
        journal_config = JournalConfig.from_config(_config(tmp_path))
        assert journal_config.mode is StorageMode.LOCAL
        assert journal_config.storage_key == "journal-entries"
        assert journal_config.remote_url == ""

    def test_synced_mode(self, tmp_path):
        config = _config(tmp_path, storage__mode="Synced", remote__url="sqlite+aiosqlite:///remote.db")
        journal_config = JournalConfig.from_config(config)
        assert journal_config.mode is StorageMode.SYNCED
        assert journal_config.remote_url == "sqlite+aiosqlite:///remote.db"

    def test_remote_mode_reads_identity(self, tmp_path):
        config = _config(
            tmp_path,
            storage__mode="remote",
            remote__url="sqlite+aiosqlite:///remote.db",
            auth__user_id="u-1",
            auth__email="me@example.com",
        )
        journal_config = JournalConfig.from_config(config)
        assert journal_config.user_id == "u-1"
        assert journal_config.email == "me@example.com"

    def test_unknown_mode(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Unknown storage.mode 'cloud'"):
            JournalConfig.from_config(_config(tmp_path, storage__mode="cloud"))

    @pytest.mark.parametrize("mode", ["synced", "remote"])
    def test_remote_modes_need_url(self, tmp_path, mode):
        with pytest.raises(ConfigurationError, match="requires remote.url"):
            JournalConfig.from_config(_config(tmp_path, storage__mode=mode))
