"""
tests/test_metrics.py

Pure unit tests for the metrics aggregator. No I/O.
"""

from __future__ import annotations

import pytest

from flows.metrics import CropMetrics, calculate_metrics, round_half_up
from flows.records import CanonicalTable, CropRecord


def _table(*rows: tuple[str, str, str, str]) -> CanonicalTable:
    return CanonicalTable(
        records=tuple(
            CropRecord(state=state, district=district, crop=crop, season=season)
            for state, district, crop, season in rows
        )
    )


class TestCalculateMetrics:
    def test_counts_and_dominant_values(self) -> None:
        table = _table(
            ("BIHAR", "PATNA", "Rice", "Kharif"),
            ("BIHAR", "PATNA", "Wheat", "Rabi"),
            ("BIHAR", "GAYA", "Rice", "Kharif"),
        )

        metrics = calculate_metrics(table)

        assert metrics == CropMetrics(
            total_crops=2,
            total_districts=2,
            total_seasons=2,
            total_records=3,
            most_common_crop="Rice",
            crop_percentage=67,
            primary_season="Kharif",
            season_percentage=67,
        )

    def test_ties_go_to_first_encountered(self) -> None:
        table = _table(
            ("X", "A", "Maize", "Rabi"),
            ("X", "B", "Rice", "Kharif"),
            ("X", "C", "Rice", "Rabi"),
            ("X", "D", "Maize", "Kharif"),
        )

        metrics = calculate_metrics(table)

        assert metrics.most_common_crop == "Maize"
        assert metrics.primary_season == "Rabi"
        assert metrics.crop_percentage == 50

    def test_percentage_rounds_half_up(self) -> None:
        # 1 of 8 records = 12.5 %
        rows = [("X", "A", "Rice", "Kharif")] + [("X", "A", f"Crop{i}", "Kharif") for i in range(7)]
        metrics = calculate_metrics(_table(*rows))
        assert metrics.crop_percentage == 13

    def test_empty_table_gives_zero_metrics(self) -> None:
        metrics = calculate_metrics(CanonicalTable.empty())
        assert metrics == CropMetrics.empty()
        assert metrics.most_common_crop == ""
        assert metrics.primary_season == ""

    def test_percentages_stay_in_range(self) -> None:
        metrics = calculate_metrics(_table(("X", "A", "Rice", "Kharif")))
        assert metrics.crop_percentage == 100
        assert 0 <= metrics.season_percentage <= 100

    def test_deterministic_across_calls(self) -> None:
        table = _table(("X", "A", "Rice", "Kharif"), ("X", "B", "Wheat", "Rabi"))
        assert calculate_metrics(table) == calculate_metrics(table)

    def test_wire_names(self) -> None:
        wire = CropMetrics(total_crops=1, most_common_crop="Rice").to_wire()
        assert wire["totalCrops"] == 1
        assert wire["mostCommonCrop"] == "Rice"
        assert set(wire) == {
            "totalCrops",
            "totalDistricts",
            "totalSeasons",
            "totalRecords",
            "mostCommonCrop",
            "cropPercentage",
            "primarySeason",
            "seasonPercentage",
        }


@pytest.mark.parametrize(
    "value, expected",
    [(0.0, 0), (12.5, 13), (66.666, 67), (49.5, 50), (50.4, 50), (100.0, 100)],
)
def test_round_half_up(value: float, expected: int) -> None:
    assert round_half_up(value) == expected
