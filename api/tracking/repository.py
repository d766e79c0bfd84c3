"""
Tracking-number persistence (raw SQL).

Table: tracking_numbers(tracking_number PK, order_number, status, created_at, updated_at)
"""

from __future__ import annotations

from typing import Any

from core import db

from .query import SearchFilters, build_search_query


async def search(filters: SearchFilters, *, limit: int) -> list[dict[str, Any]]:
    query = build_search_query(filters, limit=limit)
    return await db.fetch_all(query.sql, *query.args)


async def list_open_tracking_numbers(*, terminal_status: str, limit: int) -> list[str]:
    """
    Tracking numbers whose status is not `terminal_status` (exact, case-sensitive).

    Rows come back in the database's retrieval order.
    """
    rows = await db.fetch_all(
        """
        SELECT tracking_number
        FROM tracking_numbers
        WHERE status <> $1
        LIMIT $2
        """,
        terminal_status,
        limit,
    )
    return [str(row["tracking_number"]) for row in rows]


async def update_statuses(updates: list[tuple[str, str]]) -> int:
    """
    Bulk status update.

    `updates` is [(tracking_number, status), ...], applied in list order so
    the last entry for a tracking number wins. Unknown tracking numbers match
    no row and are skipped.
    """
    return await db.execute_batch(
        """
        UPDATE tracking_numbers
        SET status = $2,
            updated_at = now()
        WHERE tracking_number = $1
        """,
        updates,
    )
