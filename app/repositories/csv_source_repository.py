"""
app/repositories/csv_source_repository.py

Read access to the static CSV files backing the dashboard.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from app.repositories.errors import SourceUnreadableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CSVRows:
    """
    Header list plus row mappings parsed from one CSV file.
    """

    headers: tuple[str, ...] = field(default_factory=tuple)
    rows: list[dict[str, Any]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


class CSVSourceRepository:
    """
    Loads CSV files as text or as row mappings.

    Cells are kept as text (``dtype=str``) so that numeric parsing happens
    explicitly in the normalization layer.
    """

    def __init__(self, *, encoding: str = "utf-8-sig") -> None:
        self._encoding = encoding

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read_text(self, path: Path) -> str:
        """
        Return the raw text of ``path``.
        """

        try:
            return path.read_text(encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Error reading CSV file %s: %s", path, exc)
            raise SourceUnreadableError(f"Error reading CSV file: {exc}") from exc

    def read_rows(self, path: Path) -> CSVRows:
        """
        Parse ``path`` into headers and row dictionaries.

        A file with no content parses to zero rows rather than an error.
        """

        try:
            frame = pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                encoding=self._encoding,
            )
        except pd.errors.EmptyDataError:
            logger.warning("CSV file %s is empty", path)
            return CSVRows()
        except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
            logger.error("Error reading CSV file %s: %s", path, exc)
            raise SourceUnreadableError(f"Error reading CSV file: {exc}") from exc

        headers = tuple(str(column) for column in frame.columns)
        frame.columns = list(headers)
        rows = frame.to_dict(orient="records")
        logger.info("Parsed %d rows from %s", len(rows), path)
        return CSVRows(headers=headers, rows=rows)
