"""In-process scheduler for hosts without an external cron.

Runs the lifecycle sync and then the ingestion crawl once a day at
``settings.schedule_hour`` (KST). Stop with Ctrl-C.
"""

import asyncio
import logging
from datetime import timedelta, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from playscout.config import settings
from playscout.database import dispose_engine
from playscout.logging_config import configure_logging
from playscout.tasks.ingest_job import run_ingestion
from playscout.tasks.lifecycle_job import run_lifecycle_sync


async def run_daily_batch(logger: logging.Logger) -> None:
    """Sync existing shows first, then crawl for new ones."""
    try:
        await run_lifecycle_sync(logger)
    except Exception:
        logger.exception("Lifecycle sync failed")
    try:
        await run_ingestion(logger)
    except Exception:
        logger.exception("Show ingestion failed")


def create_scheduler(logger: logging.Logger) -> AsyncIOScheduler:
    """Build a scheduler with the daily batch registered."""
    tz = timezone(timedelta(hours=settings.timezone_offset_hours))
    scheduler = AsyncIOScheduler(timezone=tz)
    scheduler.add_job(
        run_daily_batch,
        trigger=CronTrigger(hour=settings.schedule_hour, minute=0, timezone=tz),
        args=[logger],
        id="daily_batch",
        name="Daily show sync and ingestion",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    return scheduler


async def serve() -> None:
    logger = configure_logging(settings)
    scheduler = create_scheduler(logger)
    scheduler.start()
    logger.info(f"Scheduler started, daily batch registered at {settings.schedule_hour:02d}:00")

    try:
        await asyncio.Event().wait()
    finally:
        scheduler.shutdown(wait=False)
        await dispose_engine()
        logger.info("Scheduler shut down")


def main() -> None:
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
