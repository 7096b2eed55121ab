"""
flows/columns.py

Column-name resolution for crop statistics rows.

Source files do not share one naming convention for the same semantic
column, so every dimension and measure carries an ordered list of accepted
names. Lookups are exact membership checks; case variants are listed
explicitly instead of folded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

DIMENSION_FIELDS: tuple[str, ...] = ("state", "district", "crop", "season")
MEASURE_FIELDS: tuple[str, ...] = ("area", "production", "crop_yield")

COLUMN_CANDIDATES: dict[str, tuple[str, ...]] = {
    "state": ("state_name", "STATE_NAME", "state", "STATE"),
    "district": ("district_name", "DISTRICT_NAME", "district", "DISTRICT"),
    "crop": ("crop_name", "CROP_NAME", "crop", "CROP"),
    "season": ("season_name", "SEASON_NAME", "season", "SEASON"),
    "area": ("area_in_hectares", "AREA_IN_HECTARES", "area", "AREA"),
    "production": (
        "production_in_tonnes",
        "PRODUCTION_IN_TONNES",
        "production",
        "PRODUCTION",
    ),
    "crop_yield": (
        "yield_in_tonnes_per_hectare",
        "YIELD_IN_TONNES_PER_HECTARE",
        "yield",
        "YIELD",
    ),
}


@dataclass(frozen=True)
class ColumnResolution:
    """
    Result of looking up one semantic column in a row.
    """

    key: str | None = None

    @property
    def found(self) -> bool:
        return self.key is not None

    @classmethod
    def not_found(cls) -> "ColumnResolution":
        return cls(key=None)


def resolve_column(row: Mapping[str, Any], candidates: Sequence[str]) -> ColumnResolution:
    """
    Return the first candidate key present in ``row``.
    """

    for name in candidates:
        if name in row:
            return ColumnResolution(key=name)
    return ColumnResolution.not_found()


def resolve_field(
    row: Mapping[str, Any],
    field_name: str,
    candidates: Mapping[str, Sequence[str]] | None = None,
) -> ColumnResolution:
    """
    Resolve a semantic field (``state``, ``crop``, ...) by its candidate names.
    """

    return resolve_column(row, (candidates or COLUMN_CANDIDATES)[field_name])


def with_extra_candidate(field_name: str, column: str) -> dict[str, tuple[str, ...]]:
    """
    Return the default candidates with ``column`` appended for ``field_name``.
    """

    merged = dict(COLUMN_CANDIDATES)
    if column not in merged[field_name]:
        merged[field_name] = (*merged[field_name], column)
    return merged


def find_state_column(headers: Iterable[str]) -> str | None:
    """
    Locate the state column of a country-wide file.

    ``state_name`` wins, then ``STATE_NAME``, then the first header that
    mentions "state" in any case.
    """

    header_list = [header for header in headers if header]
    for preferred in ("state_name", "STATE_NAME"):
        if preferred in header_list:
            return preferred
    for header in header_list:
        if "state" in header.lower():
            return header
    return None
