"""
Shared fixtures: small CSV datasets written to a temporary data directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from app.config import CacheSettings, DataSourceSettings

COUNTRY_COMPARISON_CSV = """state_name,district_name,crop_name,season_name,area_in_hectares,production_in_tonnes,yield_in_tonnes_per_hectare
BIHAR,PATNA,Rice,Kharif,100,250,2.5
BIHAR,PATNA,Wheat,Rabi,80,160,2.0
BIHAR,GAYA,Rice,Kharif,50,100,2.0
BIHAR,GAYA,,Rabi,10,5,0.5
ODISHA,PURI,Rice,Kharif,70,140,2.0
WEST BENGAL,NADIA,Jute,Kharif,40,"1,200",30
"""

BIHAR_CALENDAR_CSV = """state_name,district_name,crop_name,season_name,area_in_hectares,production_in_tonnes,yield_in_tonnes_per_hectare
BIHAR,PATNA,Rice,Kharif,100,250,2.5
BIHAR,GAYA,Maize,Rabi,30,90,3.0
"""

COUNTRY_CALENDAR_CSV = """state_name,district_name,crop_name,season_name,area_in_hectares,production_in_tonnes,yield_in_tonnes_per_hectare
ODISHA,PURI,Rice,Kharif,70,140,2.0
Odisha,CUTTACK,Rice,Rabi,20,30,1.5
WEST BENGAL,NADIA,Jute,Kharif,40,1200,30
"""


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    """Data directory laid out like the default settings expect."""
    comparison = tmp_path / "state-comparison"
    comparison.mkdir()
    (comparison / "country_crop_calender_MoAFWofIndia.csv").write_text(
        COUNTRY_COMPARISON_CSV, encoding="utf-8"
    )

    calendars = tmp_path / "state_crop_calenders"
    calendars.mkdir()
    (calendars / "BIHAR_crop_calender.csv").write_text(BIHAR_CALENDAR_CSV, encoding="utf-8")
    (calendars / "country_crop_calender_MoAFWofIndia.csv").write_text(
        COUNTRY_CALENDAR_CSV, encoding="utf-8"
    )
    return tmp_path


@pytest.fixture()
def data_settings(data_dir: Path) -> DataSourceSettings:
    return DataSourceSettings(data_dir=data_dir)


@pytest.fixture()
def cache_settings() -> CacheSettings:
    return CacheSettings(ttl_seconds=3600.0)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
