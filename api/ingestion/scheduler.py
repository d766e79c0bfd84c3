"""
Timer trigger for shipment ingestion (APScheduler).

The scheduler lives for the process lifetime; `api/main.py` starts it on
startup and shuts it down on exit.
"""

from __future__ import annotations

import logging
import os

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from . import service

DEFAULT_INGEST_CRON = "0 * * * *"
JOB_ID = "ingest_new_shipments"

logger = logging.getLogger(__name__)

_scheduler: AsyncIOScheduler | None = None


def schedule_enabled() -> bool:
    raw = os.environ.get("INGEST_SCHEDULE_ENABLED", "").strip().lower() or "true"
    return raw in {"1", "true", "yes", "y", "on"}


def ingest_cron() -> str:
    return os.environ.get("INGEST_CRON", "").strip() or DEFAULT_INGEST_CRON


def build_scheduler(cron: str | None = None) -> AsyncIOScheduler:
    scheduler = AsyncIOScheduler(timezone="UTC")
    scheduler.add_job(
        service.run_scheduled_ingestion,
        CronTrigger.from_crontab(cron or ingest_cron(), timezone="UTC"),
        id=JOB_ID,
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    return scheduler


def start() -> None:
    global _scheduler
    if _scheduler is not None:
        return None
    if not schedule_enabled():
        logger.info("ingest_scheduler_disabled")
        return None

    _scheduler = build_scheduler()
    _scheduler.start()
    logger.info("ingest_scheduler_started cron=%s", ingest_cron())


def shutdown() -> None:
    global _scheduler
    if _scheduler is None:
        return None
    _scheduler.shutdown(wait=False)
    _scheduler = None
