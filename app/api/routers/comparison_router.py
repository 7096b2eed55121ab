"""
app/api/routers/comparison_router.py

State comparison endpoints: state list, per-state comparison data and
cache invalidation.

Failures never surface as bare exceptions: every response body is a
well-formed payload and the status code reflects the failure kind.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response

from app.api.dependencies import get_state_query
from app.schemas.comparison import (
    CacheClearResponse,
    ComparisonDataResponse,
    StateListResponse,
)
from app.services.comparison_service import ComparisonService, get_comparison_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["comparison"])


@router.get("/comparison-states", response_model=StateListResponse)
def list_comparison_states(
    service: ComparisonService = Depends(get_comparison_service),
) -> StateListResponse:
    """
    List the states present in the country-wide comparison dataset.
    """

    return service.list_states()


@router.post("/comparison-states", response_model=CacheClearResponse)
def clear_comparison_states_cache(
    service: ComparisonService = Depends(get_comparison_service),
) -> CacheClearResponse:
    cleared = service.clear_states_cache()
    return CacheClearResponse(
        message="State names cache cleared successfully",
        cleared=cleared,
    )


@router.get("/comparison-data", response_model=ComparisonDataResponse)
def get_comparison_data(
    response: Response,
    state: str | None = Depends(get_state_query),
    service: ComparisonService = Depends(get_comparison_service),
) -> ComparisonDataResponse:
    """
    Return the canonical table, metrics and flow graph for one state.

    Returns HTTP 400 when ``state`` is missing and HTTP 500 when the source
    file cannot be read; every other failure is reported in ``error`` with
    HTTP 200.
    """

    outcome = service.get_comparison(state)
    response.status_code = outcome.status_code
    return outcome.payload


@router.post("/comparison-data", response_model=CacheClearResponse)
def clear_comparison_data_cache(
    state: str | None = Depends(get_state_query),
    service: ComparisonService = Depends(get_comparison_service),
) -> CacheClearResponse:
    """
    Clear the cached comparison data for one state, or for all states.
    """

    cleared = service.clear_comparison_cache(state)
    if state:
        message = f"Cache cleared for state: {state}"
    else:
        message = "All state data cache cleared"
    logger.info(message)
    return CacheClearResponse(message=message, cleared=cleared)
