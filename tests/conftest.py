"""Root-level pytest fixtures for all tests.

Provides:
- A clean configuration environment for every test
- A FastAPI TestClient (lifespan not started, so no DB pool or scheduler)
- ShipStation response builders
"""

from collections.abc import Generator

import httpx
import pytest
from fastapi.testclient import TestClient

CONFIG_ENV_VARS = (
    "SHIPSTATION_API_KEY",
    "SHIPSTATION_API_SECRET",
    "SHIPSTATION_BASE_URL",
    "SHIPSTATION_TIMEOUT_S",
    "INGEST_DAYS_BACK",
    "INGEST_SCHEDULE_ENABLED",
    "INGEST_CRON",
    "SEARCH_ROW_LIMIT",
    "TRACKING_URL_ROW_LIMIT",
    "TRACKING_URL_CHUNK_SIZE",
    "TRACKING_URL_BASE",
    "TERMINAL_STATUS",
    "CORS_ALLOW_ORIGINS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test from default configuration."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """TestClient without entering the lifespan context.

    Routes are exercised with their service calls patched, so no database
    pool is needed.
    """
    from main import app

    yield TestClient(app)


@pytest.fixture
def shipments_page():
    """Factory for ShipStation /shipments responses, one page at a time."""

    def _build(
        tracking_numbers: list[str],
        *,
        page: int = 1,
        pages: int = 1,
    ) -> httpx.Response:
        shipments = [
            {"trackingNumber": tn, "orderNumber": f"ORD-{tn}", "shipmentId": i}
            for i, tn in enumerate(tracking_numbers)
        ]
        return httpx.Response(
            200,
            json={
                "shipments": shipments,
                "total": len(shipments),
                "page": page,
                "pages": pages,
            },
        )

    return _build
