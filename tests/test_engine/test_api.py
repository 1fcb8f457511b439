# tests/test_engine/test_api.py
"""
Tests for the programmatic entry points and runtime configuration.
"""
import pytest

from citelink_core.api import enrich_citation_dicts
from citelink_core.config import DEFAULT_CONFIG, Settings, get_settings, load_config


@pytest.mark.asyncio
async def test_enrich_citation_dicts_round_trips_front_end_json(settings, write_volume, example_act_entry):
    """Volume 50 and Pub. L. 74-1 have no network links, so no request is made."""
    write_volume(50, [example_act_entry])

    resolved = await enrich_citation_dicts(
        [{"type": "stat", "stat": {"volume": "50", "page": "100"}}, {"type": "stat"}],
        settings=settings,
    )

    assert len(resolved) == 1
    assert resolved[0]["title"] == "Example Act"
    assert resolved[0]["stat"]["links"]["legisworks"]["source"]["name"] == "Legisworks"
    assert resolved[0]["parallel_citations"][0]["citation"] == "Pub. L. 74-1"


def test_load_config_missing_file_uses_defaults(tmp_path):
    assert load_config(str(tmp_path / "absent.yaml")) == DEFAULT_CONFIG


def test_load_config_reads_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("http:\n  timeout: 5\nengine:\n  max_rounds: 7\n")

    config = load_config(str(path))

    assert config["http"]["timeout"] == 5
    assert config["engine"]["max_rounds"] == 7


def test_get_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("LEGISWORKS_DATA_DIR", "/srv/legisworks/data")
    monkeypatch.setenv("COURTLISTENER_USERNAME", "user")
    monkeypatch.setenv("COURTLISTENER_PASSWORD", "secret")

    settings = get_settings({"http": {"timeout": 5}, "engine": {"max_rounds": 7}})

    assert settings.data_dir == "/srv/legisworks/data"
    assert settings.http_timeout == 5.0
    assert settings.max_rounds == 7
    assert settings.courtlistener.username == "user"


def test_courtlistener_disabled_without_credentials(monkeypatch):
    monkeypatch.delenv("COURTLISTENER_USERNAME", raising=False)
    monkeypatch.delenv("COURTLISTENER_PASSWORD", raising=False)

    assert get_settings(DEFAULT_CONFIG).courtlistener is None


def test_courtlistener_disabled_in_config(monkeypatch):
    monkeypatch.setenv("COURTLISTENER_USERNAME", "user")
    monkeypatch.setenv("COURTLISTENER_PASSWORD", "secret")

    settings = get_settings({"courtlistener": {"enabled": False}})

    assert settings.courtlistener is None
    assert isinstance(settings, Settings)
