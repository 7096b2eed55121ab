"""
app/schemas package marker.
"""

from app.schemas.comparison import (
    CacheClearResponse,
    ComparisonDataResponse,
    CropMetricsResponse,
    CropTableColumns,
    FlowGraphResponse,
    HealthResponse,
    StateListResponse,
)

__all__ = [
    "CacheClearResponse",
    "ComparisonDataResponse",
    "CropMetricsResponse",
    "CropTableColumns",
    "FlowGraphResponse",
    "HealthResponse",
    "StateListResponse",
]
