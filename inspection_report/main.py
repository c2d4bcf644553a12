from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from inspection_report.config import get_report_settings, load_env_files
from inspection_report.domain.categories import DEFAULT_SCHEMA
from inspection_report.schemas.facility_report import HealthResponse


def _validate_env() -> None:
    """
    Validate report settings at startup.

    Raises RuntimeError listing every invalid value so the operator can fix
    all problems in one restart cycle.
    """

    load_env_files()
    settings = get_report_settings()

    errors: list[str] = []
    if not settings.allowed_extensions:
        errors.append("REPORT_ALLOWED_EXTENSIONS resolved to an empty list.")
    if settings.data_window_start <= settings.header_row_index:
        errors.append(
            f"REPORT_DATA_WINDOW_START={settings.data_window_start} must lie below "
            f"REPORT_HEADER_ROW_INDEX={settings.header_row_index}."
        )
    window_size = settings.data_window_end - settings.data_window_start + 1
    if window_size < len(DEFAULT_SCHEMA):
        errors.append(
            f"Data window holds {window_size} rows but {len(DEFAULT_SCHEMA)} categories are expected."
        )

    if errors:
        raise RuntimeError(
            "Startup validation failed - invalid report settings:\n"
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


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="Inspection Report Aggregator",
        version="1.0.0",
    )

    from inspection_report.api.routers import inspection_reports_router

    application.include_router(inspection_reports_router)

    @application.get("/health")
    def healthcheck() -> HealthResponse:
        return HealthResponse(categories=len(DEFAULT_SCHEMA))

    settings = get_report_settings()
    logging.getLogger(__name__).info(
        "Application created max_files=%d window=%d-%d",
        settings.max_files,
        settings.data_window_start,
        settings.data_window_end,
    )
    return application


app = create_app()
