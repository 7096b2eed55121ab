"""
app/api/routers/crop_calendar_router.py

Raw crop calendar CSV endpoint.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from app.api.dependencies import get_state_query
from app.services.crop_calendar_service import (
    CropCalendarNotFoundError,
    CropCalendarSchemaError,
    CropCalendarService,
    get_crop_calendar_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["crop-calendar"])


@router.get(
    "/crop-calendar",
    response_class=PlainTextResponse,
    responses={
        200: {"content": {"text/csv": {}}},
        400: {"description": "State parameter missing"},
        404: {"description": "No data for the requested state"},
    },
)
def get_crop_calendar(
    state: str | None = Depends(get_state_query),
    service: CropCalendarService = Depends(get_crop_calendar_service),
) -> Response:
    """
    Return crop calendar CSV text for one state.
    """

    if state is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "State parameter is required"},
        )

    try:
        csv_text = service.get_calendar_csv(state)
    except CropCalendarNotFoundError as exc:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})
    except CropCalendarSchemaError as exc:
        logger.error("Crop calendar schema error: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )
    except Exception:  # noqa: BLE001
        logger.exception("Crop calendar lookup failed for state=%r", state)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    return PlainTextResponse(content=csv_text, media_type="text/csv")
