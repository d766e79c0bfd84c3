"""
Tracking API endpoints.

Failures are returned as {"error": "..."} with a 5xx status; store details are
logged, not returned.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from . import schemas, service
from .query import SearchFilters

logger = logging.getLogger(__name__)

router = APIRouter()


def error_response(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.get("/search", response_model=None)
async def search(
    tracking_number: str | None = Query(default=None),
    order_number: str | None = Query(default=None),
    status: str | None = Query(default=None),
    created_after: str | None = Query(default=None),
    created_before: str | None = Query(default=None),
) -> dict | JSONResponse:
    """
    Search stored tracking numbers.

    Prefix `tracking_number`, `order_number` or `status` with `!` to negate it.
    """
    filters = SearchFilters(
        tracking_number=tracking_number or None,
        order_number=order_number or None,
        status=status or None,
        created_after=created_after or None,
        created_before=created_before or None,
    )
    try:
        results = await service.search(filters)
    except Exception:
        logger.exception("search_failed filters=%s", filters)
        return error_response("Failed to search tracking numbers")
    return {"results": results, "count": len(results)}


@router.get("/tracking-urls", response_model=None)
async def tracking_urls() -> dict | JSONResponse:
    """
    Carrier tracking URLs for every tracking number not yet in the terminal status.
    """
    try:
        urls = await service.tracking_urls()
    except Exception:
        logger.exception("tracking_urls_failed")
        return error_response("Failed to get tracking URLs")
    return {"urls": urls}


@router.post("/tracking-status", response_model=None)
async def tracking_status(updates: list[schemas.StatusUpdate]) -> dict | JSONResponse:
    """
    Apply a batch of status updates: [{"tracking_number": "...", "status": "..."}, ...]
    """
    try:
        applied = await service.apply_status_updates(updates)
    except Exception:
        logger.exception("status_update_failed count=%s", len(updates))
        return error_response("Failed to update statuses")
    logger.info("status_update_complete count=%s", applied)
    return {"success": True}
