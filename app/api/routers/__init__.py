"""
app/api/routers package marker.
"""

from app.api.routers.comparison_router import router as comparison_router
from app.api.routers.crop_calendar_router import router as crop_calendar_router

__all__ = [
    "comparison_router",
    "crop_calendar_router",
]
