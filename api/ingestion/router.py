"""
FastAPI router for ingestion endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from . import service

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_days_back(raw: str | None) -> int:
    try:
        days = int((raw or "").strip())
    except ValueError:
        return service.default_days_back()
    return days if days > 0 else service.default_days_back()


@router.get("/test-scheduled", response_model=None)
async def test_scheduled(days_back: str | None = Query(default=None)) -> dict | JSONResponse:
    """
    Run the scheduled ingestion once, on demand.

    `days_back` falls back to the configured default when missing or not a
    positive integer.
    """
    try:
        shipments = await service.ingest_new_shipments(_parse_days_back(days_back))
    except Exception as e:
        logger.exception("manual_ingest_failed days_back=%s", days_back)
        return JSONResponse({"error": str(e) or "An unknown error occurred"}, status_code=500)
    return {"shipments": [s.to_api() for s in shipments]}
