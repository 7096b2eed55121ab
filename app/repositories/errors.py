"""
Repository-layer exceptions for CSV source access.
"""

from __future__ import annotations


class CSVSourceError(Exception):
    """Base exception for CSV source failures."""


class SourceUnreadableError(CSVSourceError):
    """Raised when a backing CSV file cannot be read or parsed."""
