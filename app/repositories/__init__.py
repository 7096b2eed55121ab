"""
app/repositories package marker.
"""

from app.repositories.csv_source_repository import CSVRows, CSVSourceRepository
from app.repositories.errors import CSVSourceError, SourceUnreadableError

__all__ = [
    "CSVRows",
    "CSVSourceError",
    "CSVSourceRepository",
    "SourceUnreadableError",
]
