from __future__ import annotations

from pathlib import Path

import pytest

from app import config
from app.main import _validate_env


@pytest.fixture(autouse=True)
def _fresh_settings():
    for getter in (config.get_data_source_settings, config.get_cache_settings, config.get_frontend_settings):
        getter.cache_clear()
    yield
    for getter in (config.get_data_source_settings, config.get_cache_settings, config.get_frontend_settings):
        getter.cache_clear()


def test_data_source_paths_follow_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("AGRIFLOW_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("COMPARISON_DATA_FILE", "states.csv")

    settings = config.get_data_source_settings()

    assert settings.comparison_path == tmp_path / "states.csv"
    assert settings.country_crop_calendar_path == (
        tmp_path / "state_crop_calenders" / "country_crop_calender_MoAFWofIndia.csv"
    )


def test_cache_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CACHE_TTL_SECONDS", raising=False)
    monkeypatch.delenv("FALLBACK_STATES", raising=False)

    settings = config.get_cache_settings()

    assert settings.ttl_seconds == 3600.0
    assert settings.fallback_states == ("BIHAR", "JHARKHAND", "ODISHA")


def test_cache_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHE_TTL_SECONDS", "not-a-number")
    monkeypatch.setenv("FALLBACK_STATES", " GOA, ,KERALA ")

    settings = config.get_cache_settings()

    assert settings.ttl_seconds == 3600.0
    assert settings.fallback_states == ("GOA", "KERALA")


def test_frontend_url_is_trimmed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AGRIFLOW_API_URL", "http://api.test:9000/")
    assert config.get_frontend_settings().api_url == "http://api.test:9000"


def test_startup_validation_lists_every_problem(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHE_TTL_SECONDS", "-5")
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(RuntimeError) as excinfo:
        _validate_env()

    message = str(excinfo.value)
    assert "CACHE_TTL_SECONDS" in message
    assert "LOG_LEVEL" in message
