"""Tests for workspine.core.settings."""

import pytest
from pydantic import ValidationError

from workspine.core.settings import WorkspineSettings, get_settings


class TestWorkspineSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("WORKSPINE_CONVERTER_BATCH_SIZE", raising=False)
        settings = WorkspineSettings(_env_file=None)
        assert settings.converter_batch_size == 500
        assert settings.cursor_page_size == 1000
        assert settings.log_level == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("WORKSPINE_CONVERTER_BATCH_SIZE", "25")
        monkeypatch.setenv("WORKSPINE_DATABASE_URL", "sqlite:///other.db")
        settings = WorkspineSettings(_env_file=None)
        assert settings.converter_batch_size == 25
        assert settings.database_url == "sqlite:///other.db"

    def test_batch_size_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("WORKSPINE_CONVERTER_BATCH_SIZE", "0")
        with pytest.raises(ValidationError):
            WorkspineSettings(_env_file=None)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
