"""
app/services package marker.
"""

from app.services.comparison_service import (
    ComparisonOutcome,
    ComparisonService,
    get_comparison_service,
)
from app.services.crop_calendar_service import (
    CropCalendarNotFoundError,
    CropCalendarSchemaError,
    CropCalendarService,
    get_crop_calendar_service,
)
from app.services.state_cache import CacheLookup, StateCache

__all__ = [
    "CacheLookup",
    "ComparisonOutcome",
    "ComparisonService",
    "get_comparison_service",
    "CropCalendarNotFoundError",
    "CropCalendarSchemaError",
    "CropCalendarService",
    "get_crop_calendar_service",
    "StateCache",
]
