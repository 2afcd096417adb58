from __future__ import annotations

import pytest

from nixsearch.config import NixSearchSettings, get_settings
from nixsearch.services.query import format_url


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_target_public_backend(monkeypatch):
    monkeypatch.chdir("/")
    settings = NixSearchSettings()

    assert settings.default_channel == "unstable"
    assert settings.backend.index_prefix == "latest-37-nixos"
    assert settings.backend.username == "aWVSALXpZv"
    assert settings.backend.password.get_secret_value() == "X8gPHnzL52wFEekuxsfQ9cSh"
    assert settings.backend.max_retries == 3
    assert format_url("unstable", settings.backend).startswith(
        "https://nixos-search-7-1733963800.us-east-1.bonsaisearch.net"
    )


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("NIXSEARCH_DEFAULT_CHANNEL", "24.05")
    monkeypatch.setenv("NIXSEARCH_BACKEND__BASE_URL", "http://localhost:9200")
    monkeypatch.setenv("NIXSEARCH_BACKEND__MAX_RETRIES", "0")

    settings = get_settings()

    assert settings.default_channel == "24.05"
    assert settings.backend.max_retries == 0
    assert format_url("24.05", settings.backend) == "http://localhost:9200/latest-37-nixos-24.05/_search"


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
