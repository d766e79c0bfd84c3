"""
Tracking API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel


class StatusUpdate(BaseModel):
    # Free-form on purpose: an unknown (even empty) tracking number matches no row.
    tracking_number: str
    status: str
