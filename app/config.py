"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_FALLBACK_STATES: tuple[str, ...] = ("BIHAR", "JHARKHAND", "ODISHA")
VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    for filename in (".env", ".env.local"):
        env_path = PROJECT_ROOT / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated list from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class DataSourceSettings:
    """
    Locations of the CSV files backing the dashboard.
    """

    data_dir: Path
    comparison_file: str = "state-comparison/country_crop_calender_MoAFWofIndia.csv"
    crop_calendar_dir: str = "state_crop_calenders"
    country_crop_calendar_file: str = "country_crop_calender_MoAFWofIndia.csv"

    @property
    def comparison_path(self) -> Path:
        return self.data_dir / self.comparison_file

    @property
    def crop_calendar_path(self) -> Path:
        return self.data_dir / self.crop_calendar_dir

    @property
    def country_crop_calendar_path(self) -> Path:
        return self.crop_calendar_path / self.country_crop_calendar_file


@dataclass(frozen=True)
class CacheSettings:
    """
    In-memory response cache settings.
    """

    ttl_seconds: float = 3600.0
    fallback_states: tuple[str, ...] = DEFAULT_FALLBACK_STATES


@dataclass(frozen=True)
class FrontendSettings:
    """
    Settings used by the Streamlit dashboard to reach the API.
    """

    api_url: str = "http://127.0.0.1:8000"
    timeout_seconds: float = 15.0


@lru_cache(maxsize=1)
def get_data_source_settings() -> DataSourceSettings:
    """
    Return cached data source settings from environment variables.
    """

    data_dir = Path(_get_str_env("AGRIFLOW_DATA_DIR", str(PROJECT_ROOT / "data")))
    return DataSourceSettings(
        data_dir=data_dir,
        comparison_file=_get_str_env(
            "COMPARISON_DATA_FILE",
            "state-comparison/country_crop_calender_MoAFWofIndia.csv",
        ),
        crop_calendar_dir=_get_str_env("CROP_CALENDAR_DIR", "state_crop_calenders"),
        country_crop_calendar_file=_get_str_env(
            "COUNTRY_CROP_CALENDAR_FILE",
            "country_crop_calender_MoAFWofIndia.csv",
        ),
    )


@lru_cache(maxsize=1)
def get_cache_settings() -> CacheSettings:
    """
    Return cached response-cache settings from environment variables.
    """

    return CacheSettings(
        ttl_seconds=max(1.0, _get_float_env("CACHE_TTL_SECONDS", 3600.0)),
        fallback_states=_get_list_env("FALLBACK_STATES", DEFAULT_FALLBACK_STATES),
    )


@lru_cache(maxsize=1)
def get_frontend_settings() -> FrontendSettings:
    """
    Return cached frontend settings from environment variables.
    """

    return FrontendSettings(
        api_url=_get_str_env("AGRIFLOW_API_URL", "http://127.0.0.1:8000").rstrip("/"),
        timeout_seconds=max(1.0, _get_float_env("AGRIFLOW_HTTP_TIMEOUT_SECONDS", 15.0)),
    )
