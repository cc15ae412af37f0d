"""
Tests for src/core/config.py
"""

import pytest

from src.core.config import ConfigValidationError, load_config


ENV_VARS = [
    "DISCORD_TOKEN", "TEST_GUILD_ID", "INVITE_CHECK_COOLDOWN", "SCAN_LEASE_SECONDS",
    "MESSAGE_WINDOW", "SWEEP_INTERVAL", "SWEEP_BATCH_SIZE", "SWEEP_CONCURRENCY",
    "MESSAGE_CACHE_SIZE", "ERROR_WEBHOOK_URL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DISCORD_TOKEN", "token")
    return monkeypatch


class TestLoadConfig:

    def test_defaults(self, clean_env):
        config = load_config()
        assert config.discord_token == "token"
        assert config.test_guild_id is None
        assert config.invite_check_cooldown == 86400
        assert config.message_window == 15
        assert config.sweep_interval == 600
        assert config.sweep_batch_size == 4
        assert config.error_webhook_url is None

    def test_missing_token(self, clean_env):
        clean_env.delenv("DISCORD_TOKEN")
        with pytest.raises(ConfigValidationError):
            load_config()

    def test_overrides(self, clean_env):
        clean_env.setenv("TEST_GUILD_ID", "1234")
        clean_env.setenv("MESSAGE_WINDOW", "25")
        clean_env.setenv("ERROR_WEBHOOK_URL", "https://example.com/hook")

        config = load_config()
        assert config.test_guild_id == 1234
        assert config.message_window == 25
        assert config.error_webhook_url == "https://example.com/hook"

    def test_out_of_range_clamped(self, clean_env):
        clean_env.setenv("MESSAGE_WINDOW", "500")
        clean_env.setenv("SWEEP_INTERVAL", "5")
        config = load_config()
        assert config.message_window == 100
        assert config.sweep_interval == 60

    def test_invalid_values_fall_back(self, clean_env):
        clean_env.setenv("SWEEP_BATCH_SIZE", "lots")
        clean_env.setenv("ERROR_WEBHOOK_URL", "not-a-url")
        config = load_config()
        assert config.sweep_batch_size == 4
        assert config.error_webhook_url is None

    def test_invalid_guild_id(self, clean_env):
        clean_env.setenv("TEST_GUILD_ID", "abc")
        with pytest.raises(ConfigValidationError):
            load_config()
