"""
flows/metrics.py

Summary metrics for a canonical crop table.

Formulas
--------
total_crops / total_districts / total_seasons = distinct values per column
total_records                                 = row count
most_common_crop                              = highest occurrence count,
                                                ties go to the first seen
crop_percentage                               = round_half_up(count / total * 100)
primary_season / season_percentage            = same method on seasons
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Sequence

from flows.records import CanonicalTable

_WIRE_NAMES: dict[str, str] = {
    "total_crops": "totalCrops",
    "total_districts": "totalDistricts",
    "total_seasons": "totalSeasons",
    "total_records": "totalRecords",
    "most_common_crop": "mostCommonCrop",
    "crop_percentage": "cropPercentage",
    "primary_season": "primarySeason",
    "season_percentage": "seasonPercentage",
}


@dataclass(frozen=True)
class CropMetrics:
    """
    Read-only summary of one canonical table.
    """

    total_crops: int = 0
    total_districts: int = 0
    total_seasons: int = 0
    total_records: int = 0
    most_common_crop: str = ""
    crop_percentage: int = 0
    primary_season: str = ""
    season_percentage: int = 0

    @classmethod
    def empty(cls) -> "CropMetrics":
        return cls()

    def to_wire(self) -> dict[str, Any]:
        return {_WIRE_NAMES[key]: value for key, value in asdict(self).items()}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _dominant(values: Sequence[str]) -> tuple[str, int]:
    counts: dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1

    leader = ""
    highest = 0
    for value, count in counts.items():
        if count > highest:
            highest = count
            leader = value
    return leader, highest


def _percentage(count: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(count / total * 100)


def calculate_metrics(table: CanonicalTable) -> CropMetrics:
    """
    Compute counts and dominant-category shares for ``table``.
    """

    total_records = len(table)
    if total_records == 0:
        return CropMetrics.empty()

    crops = table.column("crop")
    seasons = table.column("season")
    most_common_crop, crop_count = _dominant(crops)
    primary_season, season_count = _dominant(seasons)

    return CropMetrics(
        total_crops=len(set(crops)),
        total_districts=len(set(table.column("district"))),
        total_seasons=len(set(seasons)),
        total_records=total_records,
        most_common_crop=most_common_crop,
        crop_percentage=_percentage(crop_count, total_records),
        primary_season=primary_season,
        season_percentage=_percentage(season_count, total_records),
    )
