"""
ShipStation HTTP client helpers.

Used endpoint:
- GET /shipments?shipDateStart=YYYY-MM-DD&page=N
    -> {"shipments": [{"trackingNumber": "...", "orderNumber": "...", ...}],
        "total": 123, "page": 1, "pages": 3}
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

import httpx


# ShipStation failures are explicit and separable from other runtime errors.
class ShipStationError(RuntimeError):
    pass


class ShipStationHTTPError(ShipStationError):
    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"ShipStation API error: {status_code} - {body[:500]}")


class ShipStationResponseError(ShipStationError):
    pass


@dataclass(frozen=True)
class Shipment:
    tracking_number: str
    order_number: str | None

    def to_api(self) -> dict[str, str | None]:
        return {"trackingNumber": self.tracking_number, "orderNumber": self.order_number}


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise ShipStationError("SHIPSTATION_BASE_URL is empty.")
    return base_url.rstrip("/")


def basic_auth(api_key: str, api_secret: str) -> httpx.BasicAuth:
    api_key = (api_key or "").strip()
    api_secret = (api_secret or "").strip()
    if not api_key or not api_secret:
        raise ShipStationError("ShipStation API key/secret are not set.")
    return httpx.BasicAuth(api_key, api_secret)


async def fetch_page(
    client: httpx.AsyncClient,
    *,
    ship_date_start: date,
    page: int,
) -> dict[str, Any]:
    """
    Fetch one page of the shipment listing.

    Raises on a non-2xx status or when the body has no `shipments` list.
    """
    params: dict[str, Any] = {"shipDateStart": ship_date_start.isoformat()}
    if page > 1:
        params["page"] = page

    resp = await client.get("/shipments", params=params)

    if not resp.is_success:
        raise ShipStationHTTPError(resp.status_code, resp.text)

    try:
        data = resp.json()
    except ValueError as e:
        raise ShipStationResponseError("Invalid response format: body is not JSON") from e

    if not isinstance(data, dict) or not isinstance(data.get("shipments"), list):
        raise ShipStationResponseError("Invalid response format: missing shipments array")

    return data


def _page_count(data: dict[str, Any]) -> int:
    try:
        return max(int(data.get("pages") or 1), 1)
    except (TypeError, ValueError) as e:
        raise ShipStationResponseError("Invalid response format: pages is not a number") from e


async def fetch_shipments(
    *,
    base_url: str,
    api_key: str,
    api_secret: str,
    ship_date_start: date,
    timeout_s: float = 30.0,
) -> list[dict[str, Any]]:
    """
    Fetch every page of shipments shipped on/after `ship_date_start`.

    Pages are requested one after another and accumulated in page order. The
    first failing page aborts the whole fetch: there is no partial result.
    """
    base_url = _normalize_base_url(base_url)
    # One credential for every page of this fetch.
    auth = basic_auth(api_key, api_secret)
    headers = {"Content-Type": "application/json"}

    async with httpx.AsyncClient(
        base_url=base_url,
        auth=auth,
        headers=headers,
        timeout=timeout_s,
    ) as client:
        first = await fetch_page(client, ship_date_start=ship_date_start, page=1)
        shipments: list[dict[str, Any]] = list(first["shipments"])

        pages = _page_count(first)
        for page in range(2, pages + 1):
            data = await fetch_page(client, ship_date_start=ship_date_start, page=page)
            shipments.extend(data["shipments"])

    return shipments
