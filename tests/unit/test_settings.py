"""Tests for application settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from afkbot.core.config import AfkSettings, get_settings, reset_settings


class TestAfkSettings:
    """Tests for AfkSettings."""

    def test_defaults(self):
        settings = AfkSettings()

        assert settings.accounts_file == Path("accounts.txt")
        assert settings.ping_interval_ms == 1000
        assert settings.log_level == "INFO"
        assert settings.log_timezone == "Asia/Manila"
        assert settings.gateway_base == "https://gateway.octant.sh"
        assert settings.hosting_base == "https://hosting.octant.sh"
        assert settings.log_file is None
        assert settings.show_raw_responses is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("AFK_PING_INTERVAL_MS", "2500")
        monkeypatch.setenv("AFK_ACCOUNTS_FILE", "/tmp/other.txt")
        monkeypatch.setenv("AFK_LOG_LEVEL", "debug")

        settings = AfkSettings()

        assert settings.ping_interval_ms == 2500
        assert settings.accounts_file == Path("/tmp/other.txt")
        assert settings.log_level == "DEBUG"

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("AFK_PING_INTERVAL_MS=750\n", encoding="utf-8")

        assert AfkSettings().ping_interval_ms == 750

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError, match="Invalid log level"):
            AfkSettings(log_level="LOUD")

    def test_invalid_timezone(self):
        with pytest.raises(ValidationError, match="Unknown timezone"):
            AfkSettings(log_timezone="Mars/Olympus_Mons")

    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            AfkSettings(ping_interval_ms=0)

    def test_base_url_trailing_slash_removed(self):
        settings = AfkSettings(hosting_base="https://hosting.example/")

        assert settings.hosting_base == "https://hosting.example"

    def test_base_url_requires_scheme(self):
        with pytest.raises(ValidationError):
            AfkSettings(gateway_base="gateway.example")


class TestSettingsSingleton:
    """Tests for get_settings / reset_settings."""

    def test_singleton(self):
        assert get_settings() is get_settings()

    def test_reset(self):
        first = get_settings()
        reset_settings()

        assert get_settings() is not first
