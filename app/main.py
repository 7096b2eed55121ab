from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import Depends, FastAPI

from app.config import VALID_LOG_LEVELS, get_data_source_settings, load_env_files
from app.schemas.comparison import HealthResponse
from app.services.comparison_service import ComparisonService, get_comparison_service


def _validate_env() -> None:
    """
    Validate optional environment variables at startup.

    Raises RuntimeError listing every invalid variable so the operator can
    fix all problems in one restart cycle. Unset variables fall back to
    defaults and are not errors.
    """

    load_env_files()

    errors: list[str] = []

    # --- CACHE_TTL_SECONDS ----------------------------------------------
    raw_ttl = os.getenv("CACHE_TTL_SECONDS")
    if raw_ttl is not None:
        try:
            if float(raw_ttl) <= 0:
                errors.append(f"CACHE_TTL_SECONDS='{raw_ttl}' must be a positive number of seconds.")
        except ValueError:
            errors.append(f"CACHE_TTL_SECONDS='{raw_ttl}' is not a number.")

    # --- LOG_LEVEL ------------------------------------------------------
    raw_level = os.getenv("LOG_LEVEL")
    if raw_level is not None and raw_level.strip().upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"LOG_LEVEL='{raw_level}' is not valid. Allowed values: {sorted(VALID_LOG_LEVELS)}."
        )

    if errors:
        raise RuntimeError(
            "Startup validation failed, invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _check_data_sources() -> None:
    """Log which backing CSV files are present. Missing files are not fatal."""
    log = logging.getLogger(__name__)
    settings = get_data_source_settings()
    for label, path in (
        ("comparison", settings.comparison_path),
        ("country crop calendar", settings.country_crop_calendar_path),
    ):
        if path.is_file():
            log.info("Using %s data from %s", label, path)
        else:
            log.warning(
                "%s data file %s is missing; requests will use fallbacks.",
                label.capitalize(),
                path,
            )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Report data sources on boot; drop cached payloads on exit."""
    _check_data_sources()
    try:
        yield
    finally:
        get_comparison_service().clear_comparison_cache()
        logging.getLogger(__name__).info("Comparison cache cleared on shutdown")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="AgriFlow API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import comparison_router, crop_calendar_router

    application.include_router(comparison_router)
    application.include_router(crop_calendar_router)

    @application.get("/health", response_model=HealthResponse)
    def healthcheck(
        service: ComparisonService = Depends(get_comparison_service),
    ) -> HealthResponse:
        return HealthResponse(comparison_source_available=service.source_available())

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
