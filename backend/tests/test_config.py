"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from dialogrules.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("DIALOGRULES_LAYOUT", raising=False)
    monkeypatch.delenv("DIALOGRULES_LOG_LEVEL", raising=False)


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.log_level == "WARNING"
        assert settings.layout_path is None

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DIALOGRULES_LOG_LEVEL", "debug")
        monkeypatch.setenv("DIALOGRULES_LAYOUT", "dialogs/settings.yaml")
        settings = Settings.from_env()
        assert settings.log_level == "DEBUG"
        assert settings.layout_path == Path("dialogs/settings.yaml")

    def test_invalid_level(self, monkeypatch):
        monkeypatch.setenv("DIALOGRULES_LOG_LEVEL", "loud")
        with pytest.raises(ValueError, match="Invalid DIALOGRULES_LOG_LEVEL 'LOUD'"):
            Settings.from_env()

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("DIALOGRULES_LOG_LEVEL", "loud")
        assert Settings.from_env("info").log_level == "INFO"
