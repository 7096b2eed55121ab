"""
flows/records.py

Typed crop records and the canonical table built from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

# Canonical field name -> key used by the parallel-sequence wire form.
WIRE_COLUMNS: dict[str, str] = {
    "state": "state_name",
    "district": "district_name",
    "crop": "crop_name",
    "season": "season_name",
    "area": "area",
    "production": "production",
    "crop_yield": "yield",
}


@dataclass(frozen=True)
class CropRecord:
    """
    One agricultural observation for a district, crop and season.

    Dimension values are trimmed and non-empty; measures default to zero.
    """

    state: str
    district: str
    crop: str
    season: str
    area: float = 0.0
    """Cultivated area in hectares."""

    production: float = 0.0
    """Production in tonnes."""

    crop_yield: float = 0.0
    """Yield in tonnes per hectare."""


@dataclass(frozen=True)
class CanonicalTable:
    """
    Ordered, validated collection of crop records.
    """

    records: tuple[CropRecord, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> "CanonicalTable":
        return cls(records=())

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[CropRecord]:
        return iter(self.records)

    def column(self, name: str) -> list[Any]:
        """
        Return the values of one record field in row order.
        """

        if name not in WIRE_COLUMNS:
            raise KeyError(f"Unknown crop record field: {name}")
        return [getattr(record, name) for record in self.records]

    def to_columns(self) -> dict[str, list[Any]]:
        """
        Serialize as parallel sequences keyed by wire column name.
        """

        return {wire: self.column(name) for name, wire in WIRE_COLUMNS.items()}
