"""
Shipment ingestion.

Flow:
1) Compute the cutoff date (today UTC minus `days_back`)
2) Fetch every ShipStation shipment page since the cutoff
3) Insert new tracking numbers (existing ones are ignored)

The same flow backs the scheduled job and the manual trigger endpoint.
"""

from __future__ import annotations

import logging
import os
from datetime import date, datetime, timedelta, timezone
from typing import Any

from core import shipstation
from core.shipstation import Shipment

from . import repository

DEFAULT_DAYS_BACK = 1
DEFAULT_SHIPSTATION_BASE_URL = "https://ssapi.shipstation.com"
DEFAULT_SHIPSTATION_TIMEOUT_S = 30.0

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def default_days_back() -> int:
    days = _env_int("INGEST_DAYS_BACK", DEFAULT_DAYS_BACK)
    return days if days >= 0 else DEFAULT_DAYS_BACK


def shipstation_base_url() -> str:
    return os.environ.get("SHIPSTATION_BASE_URL", "").strip() or DEFAULT_SHIPSTATION_BASE_URL


def shipstation_timeout_s() -> float:
    return _env_float("SHIPSTATION_TIMEOUT_S", DEFAULT_SHIPSTATION_TIMEOUT_S)


def shipstation_credentials() -> tuple[str, str]:
    return (
        os.environ.get("SHIPSTATION_API_KEY", "").strip(),
        os.environ.get("SHIPSTATION_API_SECRET", "").strip(),
    )


def cutoff_date(days_back: int, *, today: date | None = None) -> date:
    today = today or datetime.now(timezone.utc).date()
    return today - timedelta(days=days_back)


def to_shipments(raw_shipments: list[Any]) -> list[Shipment]:
    """
    Keep only the fields we store. Entries that are not objects or have no
    tracking number are dropped.
    """
    shipments: list[Shipment] = []
    for raw in raw_shipments:
        if not isinstance(raw, dict):
            continue
        tracking_number = str(raw.get("trackingNumber") or "").strip()
        if not tracking_number:
            continue
        order_number = raw.get("orderNumber")
        shipments.append(
            Shipment(
                tracking_number=tracking_number,
                order_number=str(order_number) if order_number is not None else None,
            )
        )

    skipped = len(raw_shipments) - len(shipments)
    if skipped:
        logger.info("shipments_skipped skipped=%s", skipped)
    return shipments


async def fetch_new_shipments(days_back: int) -> list[Shipment]:
    api_key, api_secret = shipstation_credentials()
    ship_date_start = cutoff_date(days_back)
    logger.info("shipstation_fetch_start ship_date_start=%s", ship_date_start.isoformat())

    raw_shipments = await shipstation.fetch_shipments(
        base_url=shipstation_base_url(),
        api_key=api_key,
        api_secret=api_secret,
        ship_date_start=ship_date_start,
        timeout_s=shipstation_timeout_s(),
    )
    return to_shipments(raw_shipments)


async def ingest_new_shipments(days_back: int | None = None) -> list[Shipment]:
    """
    Fetch recent shipments and store their tracking numbers.

    Errors propagate; nothing is stored unless every page was fetched.
    """
    if days_back is None:
        days_back = default_days_back()

    shipments = await fetch_new_shipments(days_back)
    submitted = await repository.insert_new_tracking_numbers(shipments)
    logger.info(
        "ingest_complete days_back=%s fetched=%s submitted=%s",
        days_back,
        len(shipments),
        submitted,
    )
    return shipments


async def run_scheduled_ingestion() -> None:
    """
    Scheduler entrypoint.

    This should never raise into the scheduler; we just log failures.
    """
    try:
        await ingest_new_shipments()
    except Exception:
        logger.exception("scheduled_ingest_failed")
