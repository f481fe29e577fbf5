"""Tests for readerly.config module."""

import re

import pytest
from pydantic import ValidationError

from readerly.config import DEFAULT_ALLOWED_ATTRS, DEFAULT_ALLOWED_TAGS, Settings, get_settings


class TestSettings:
    """Tests for Settings class."""

    def test_default_settings(self, settings):
        """Test Settings defaults."""
        assert settings.min_text_length == 25
        assert settings.allowed_tags == DEFAULT_ALLOWED_TAGS
        assert settings.allowed_attrs == {"src", "href"}
        assert settings.fetch_timeout == 30.0
        assert settings.allow_private_hosts is False

    def test_default_allowed_tags(self):
        """Test the serialization allow-list contents."""
        for tag in ("div", "p", "a", "img", "figure", "br", "span", "strong", "font", "embed"):
            assert tag in DEFAULT_ALLOWED_TAGS
        for level in range(1, 7):
            assert f"h{level}" in DEFAULT_ALLOWED_TAGS
        assert "script" not in DEFAULT_ALLOWED_TAGS
        assert DEFAULT_ALLOWED_ATTRS == {"src", "href"}

    def test_patterns_are_case_insensitive(self, settings):
        """Test that class/id patterns ignore case."""
        assert settings.negative_pattern.search("SideBar")
        assert settings.positive_pattern.search("ARTICLE")
        assert settings.unlikely_pattern.search("Comment-List")

    def test_custom_values(self):
        """Test overriding tunables at construction."""
        settings = Settings(
            _env_file=None,
            min_text_length=40,
            allowed_tags=frozenset({"p"}),
            positive_pattern=r"(?i)story",
        )

        assert settings.min_text_length == 40
        assert settings.allowed_tags == {"p"}
        assert isinstance(settings.positive_pattern, re.Pattern)
        assert settings.positive_pattern.search("top-STORY")

    def test_env_prefix(self, monkeypatch):
        """Test that READERLY_ prefix works for environment variables."""
        monkeypatch.setenv("READERLY_MIN_TEXT_LENGTH", "60")
        monkeypatch.setenv("READERLY_ALLOWED_ATTRS", '["src", "href", "title"]')
        monkeypatch.setenv("READERLY_ALLOW_PRIVATE_HOSTS", "true")

        settings = Settings(_env_file=None)

        assert settings.min_text_length == 60
        assert settings.allowed_attrs == {"src", "href", "title"}
        assert settings.allow_private_hosts is True

    def test_settings_are_immutable(self, settings):
        """Test that settings cannot change once built."""
        with pytest.raises(ValidationError):
            settings.min_text_length = 10

    def test_negative_min_text_length_rejected(self):
        """Test validation of the minimum paragraph length."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, min_text_length=-1)


class TestGetSettings:
    """Tests for get_settings factory function."""

    def test_get_settings_returns_settings_instance(self, monkeypatch):
        """Test that get_settings returns a Settings instance."""
        monkeypatch.setenv("READERLY_MIN_TEXT_LENGTH", "30")
        settings = get_settings()

        assert isinstance(settings, Settings)
        assert settings.min_text_length == 30
