"""
Tracking service layer.

Reads configuration from the environment and calls the repository:
- filtered search over stored tracking numbers
- carrier tracking URLs for everything not yet delivered
- bulk status reconciliation
"""

from __future__ import annotations

import os
from typing import Any

from . import repository, urls
from .query import SearchFilters
from .schemas import StatusUpdate

DEFAULT_SEARCH_ROW_LIMIT = 2000
DEFAULT_TRACKING_URL_ROW_LIMIT = 2000
DEFAULT_TERMINAL_STATUS = "delivered"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def search_row_limit() -> int:
    return _env_int("SEARCH_ROW_LIMIT", DEFAULT_SEARCH_ROW_LIMIT)


def tracking_url_row_limit() -> int:
    return _env_int("TRACKING_URL_ROW_LIMIT", DEFAULT_TRACKING_URL_ROW_LIMIT)


def tracking_url_chunk_size() -> int:
    return _env_int("TRACKING_URL_CHUNK_SIZE", urls.DEFAULT_CHUNK_SIZE)


def tracking_url_base() -> str:
    return os.environ.get("TRACKING_URL_BASE", urls.DEFAULT_URL_BASE).strip() or urls.DEFAULT_URL_BASE


def terminal_status() -> str:
    # Not stripped or lowercased: the comparison is exact.
    return os.environ.get("TERMINAL_STATUS", "") or DEFAULT_TERMINAL_STATUS


async def search(filters: SearchFilters) -> list[dict[str, Any]]:
    return await repository.search(filters, limit=search_row_limit())


async def tracking_urls() -> list[str]:
    tracking_numbers = await repository.list_open_tracking_numbers(
        terminal_status=terminal_status(),
        limit=tracking_url_row_limit(),
    )
    return urls.build_tracking_urls(
        tracking_numbers,
        url_base=tracking_url_base(),
        chunk_size=tracking_url_chunk_size(),
    )


async def apply_status_updates(updates: list[StatusUpdate]) -> int:
    return await repository.update_statuses([(u.tracking_number, u.status) for u in updates])
