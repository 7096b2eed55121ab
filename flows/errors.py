"""
flows/errors.py

Exceptions raised by the crop-flow transformation layer.
"""

from __future__ import annotations

from typing import Sequence


class FlowDataError(Exception):
    """Base exception for crop data transformation failures."""


class SchemaUnresolvableError(FlowDataError):
    """
    Raised when a required dimension column cannot be located in the source rows.
    """

    def __init__(self, *, missing: Sequence[str], available: Sequence[str]) -> None:
        self.missing = tuple(missing)
        self.available = tuple(available)
        super().__init__(
            "No usable "
            + "/".join(self.missing)
            + " column found. Available columns: "
            + (", ".join(self.available) or "<none>")
        )


class StateNotFoundError(FlowDataError):
    """
    Raised when a requested state has no matching value in the dataset.
    """

    def __init__(self, *, requested: str, sample: Sequence[str]) -> None:
        self.requested = requested
        self.sample = tuple(sample)
        super().__init__(f'State "{requested}" not found in data')


class EmptyResultError(FlowDataError):
    """
    Raised when a state matched but no rows survived normalization.
    """

    def __init__(self, *, state: str, message: str | None = None) -> None:
        self.state = state
        super().__init__(message or f"No data found for state: {state}")
