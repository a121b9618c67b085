"""Unit tests for cvecat/config.py -- environment-driven Settings."""

import pytest
from pydantic import ValidationError

from cvecat.config import DEFAULT_FORMAT, Settings, get_settings
from cvecat.identifier import DEFAULT_BASE_URL


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.format == DEFAULT_FORMAT
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout is None

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("CVECAT_FORMAT", "{{ cve_metadata.cve_id }}")
        monkeypatch.setenv("CVECAT_TIMEOUT", "2.5")
        settings = Settings()
        assert settings.format == "{{ cve_metadata.cve_id }}"
        assert settings.timeout == 2.5

    def test_non_positive_timeout_rejected(self, monkeypatch):
        monkeypatch.setenv("CVECAT_TIMEOUT", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_settings_are_frozen(self):
        with pytest.raises(ValidationError):
            Settings().format = "x"

    def test_get_settings_is_cached(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("CVECAT_FORMAT", "changed")
        assert get_settings() is first
        get_settings.cache_clear()
        assert get_settings().format == "changed"
