"""
app/services/crop_calendar_service.py

Serves raw crop calendar CSV text for one state.

A dedicated ``<STATE>_crop_calender.csv`` file wins when present. Otherwise
the country-wide calendar is filtered on its ``state_name`` column.
"""

from __future__ import annotations

import csv
import io
import logging
from functools import lru_cache
from pathlib import Path

from app.config import DataSourceSettings, get_data_source_settings
from app.repositories.csv_source_repository import CSVSourceRepository
from app.repositories.errors import SourceUnreadableError
from flows.states import state_for_file

logger = logging.getLogger(__name__)

STATE_FILE_SUFFIX = "_crop_calender.csv"
COUNTRY_STATE_COLUMN = "state_name"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CropCalendarError(Exception):
    """Base exception for crop calendar lookups."""


class CropCalendarNotFoundError(CropCalendarError):
    """Raised when no calendar data exists for the requested state."""


class CropCalendarSchemaError(CropCalendarError):
    """Raised when the country-wide calendar has no ``state_name`` column."""


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class CropCalendarService:
    """
    Locates per-state crop calendar CSV text.
    """

    def __init__(
        self,
        *,
        data_settings: DataSourceSettings,
        repository: CSVSourceRepository | None = None,
    ) -> None:
        self._data_settings = data_settings
        self._repository = repository or CSVSourceRepository()

    def get_calendar_csv(self, state: str) -> str:
        """
        Return CSV text for ``state``.

        Raises
        ------
        CropCalendarNotFoundError
            When neither a dedicated file nor matching country rows exist.
        CropCalendarSchemaError
            When the country-wide file lacks a ``state_name`` column.
        """

        for path in self._dedicated_paths(state):
            if not self._repository.exists(path):
                continue
            try:
                text = self._repository.read_text(path)
            except SourceUnreadableError as exc:
                logger.error("Error reading file for state %s: %s", state, exc)
                break
            logger.info("Serving dedicated crop calendar %s", path.name)
            return text

        try:
            country_text = self._repository.read_text(
                self._data_settings.country_crop_calendar_path
            )
        except SourceUnreadableError as exc:
            raise CropCalendarNotFoundError(f"Data not available for state: {state}") from exc

        return self._filter_country_csv(country_text, state)

    def _dedicated_paths(self, state: str) -> list[Path]:
        cleaned = state.strip()
        if not cleaned or any(token in cleaned for token in ("/", "\\", "..")):
            return []
        names = dict.fromkeys([cleaned, state_for_file(cleaned)])
        directory = self._data_settings.crop_calendar_path
        return [directory / f"{name}{STATE_FILE_SUFFIX}" for name in names]

    @staticmethod
    def _filter_country_csv(text: str, state: str) -> str:
        reader = csv.reader(io.StringIO(text))
        header = next(reader, None)
        if not header or COUNTRY_STATE_COLUMN not in header:
            raise CropCalendarSchemaError(
                "Could not find state_name column in country data"
            )
        state_index = header.index(COUNTRY_STATE_COLUMN)
        target = state.replace("_", " ").strip().upper()

        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(header)
        matched = 0
        for row in reader:
            if len(row) <= state_index:
                continue
            if row[state_index].strip().upper() == target:
                writer.writerow(row)
                matched += 1

        if matched == 0:
            raise CropCalendarNotFoundError(f"No data found for state: {state}")
        logger.info("Filtered %d country calendar rows for state %s", matched, state)
        return output.getvalue()


@lru_cache(maxsize=1)
def get_crop_calendar_service() -> CropCalendarService:
    """
    Build and cache the crop calendar service with env-driven settings.
    """

    return CropCalendarService(data_settings=get_data_source_settings())
