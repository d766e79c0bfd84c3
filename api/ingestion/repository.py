"""
Ingestion persistence.
This module is where ingestion-related SQL lives.
"""

from __future__ import annotations

from core import db
from core.shipstation import Shipment

PENDING_STATUS = "pending"


async def insert_new_tracking_numbers(shipments: list[Shipment]) -> int:
    """
    Insert shipments as new tracking rows; existing tracking numbers are left untouched.

    All rows go in one transaction. Returns the number of rows submitted
    (0 for an empty list, in which case nothing is sent).
    """
    records = [(s.tracking_number, s.order_number, PENDING_STATUS) for s in shipments]
    return await db.execute_batch(
        """
        INSERT INTO tracking_numbers (tracking_number, order_number, status, created_at)
        VALUES ($1, $2, $3, now())
        ON CONFLICT (tracking_number) DO NOTHING
        """,
        records,
    )
