"""
tests/conftest.py -- Shared fixtures for cvecat unit tests.

No test in this suite touches the network: the requests session in
cvecat.fetcher is always patched.
"""

from __future__ import annotations

import logging

import pytest

from cvecat.config import get_settings

from .records import SAMPLE_RECORD, to_bytes


@pytest.fixture
def sample_bytes() -> bytes:
    return to_bytes(SAMPLE_RECORD)


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    """Keep CVECAT_* variables from the developer's shell out of every test."""
    for name in ("CVECAT_FORMAT", "CVECAT_BASE_URL", "CVECAT_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def cvecat_logs(caplog):
    """caplog capturing everything the cvecat loggers emit."""
    caplog.set_level(logging.DEBUG, logger="cvecat")
    return caplog
