"""
flows/normalizer.py

Normalizes raw parsed CSV rows into a canonical crop table.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping, Sequence

from flows.columns import COLUMN_CANDIDATES, DIMENSION_FIELDS, MEASURE_FIELDS, resolve_field
from flows.errors import SchemaUnresolvableError
from flows.records import CanonicalTable, CropRecord

logger = logging.getLogger(__name__)


def parse_measure(value: Any) -> float:
    """
    Parse a numeric measure, falling back to 0.0 for anything unusable.
    """

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


class RowNormalizer:
    """
    Builds :class:`CanonicalTable` objects from loosely-named source rows.
    """

    def __init__(self, *, candidates: Mapping[str, Sequence[str]] | None = None) -> None:
        self._candidates: dict[str, tuple[str, ...]] = {
            field_name: tuple(names)
            for field_name, names in (candidates or COLUMN_CANDIDATES).items()
        }

    def normalize(self, rows: Iterable[Mapping[str, Any]]) -> CanonicalTable:
        """
        Resolve columns per row, keep rows with all four dimensions present.

        Raises
        ------
        SchemaUnresolvableError
            When the first row lacks any of the state/district/crop/season
            columns.
        """

        records: list[CropRecord] = []
        dropped = 0

        for index, row in enumerate(rows):
            if index == 0:
                self._check_schema(row)

            dimensions: dict[str, str] = {}
            for field_name in DIMENSION_FIELDS:
                resolution = resolve_field(row, field_name, self._candidates)
                dimensions[field_name] = (
                    _clean_text(row[resolution.key]) if resolution.found else ""
                )
            if not all(dimensions.values()):
                dropped += 1
                continue

            measures: dict[str, float] = {}
            for field_name in MEASURE_FIELDS:
                resolution = resolve_field(row, field_name, self._candidates)
                measures[field_name] = (
                    parse_measure(row[resolution.key]) if resolution.found else 0.0
                )

            records.append(CropRecord(**dimensions, **measures))

        if dropped:
            logger.debug("Dropped %d rows missing a required dimension", dropped)
        return CanonicalTable(records=tuple(records))

    def _check_schema(self, row: Mapping[str, Any]) -> None:
        missing = [
            field_name
            for field_name in DIMENSION_FIELDS
            if not resolve_field(row, field_name, self._candidates).found
        ]
        if missing:
            raise SchemaUnresolvableError(missing=missing, available=list(row.keys()))
