"""Background task scheduler using APScheduler."""

import logging
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from licenze_api.config import get_settings
from licenze_api.repositories.store import LicenseStore
from licenze_api.services.renewal_service import run_renewals_once

logger = logging.getLogger(__name__)

RENEWAL_JOB_ID = "automatic_license_renewal"

# Global scheduler instance
_scheduler: AsyncIOScheduler | None = None
# Store used by the renewal job; None means a fresh database session per run
_store: LicenseStore | None = None


async def automatic_renewal_job() -> None:
    """Background job running the daily automatic renewal pass."""
    settings = get_settings()
    timeout = settings.renewal_run_timeout_seconds

    logger.info("Starting scheduled automatic renewal")

    try:
        if _store is not None:
            summary = await run_renewals_once(_store, timeout_seconds=timeout)
        else:
            from licenze_api.database import async_session_maker
            from licenze_api.repositories.store import SqlLicenseStore

            async with async_session_maker() as session:
                store = SqlLicenseStore(session, autocommit=True)
                summary = await run_renewals_once(store, timeout_seconds=timeout)
        logger.info(
            f"Scheduled automatic renewal finished: {summary.succeeded} renewed, "
            f"{summary.failed} failed"
        )
    except Exception as e:
        logger.error(f"Scheduled automatic renewal failed: {e}")


async def start_scheduler(store: LicenseStore | None = None) -> AsyncIOScheduler:
    """Start the background scheduler and register the daily renewal.

    Calling it again while the scheduler runs returns the running instance.
    Registration errors are not caught: a process that cannot schedule
    renewals should fail at startup.

    Args:
        store: Store for the renewal job, or None to use the database

    Returns:
        The running scheduler
    """
    global _scheduler, _store

    if _scheduler is not None and _scheduler.running:
        logger.debug("Background scheduler already running")
        return _scheduler

    settings = get_settings()
    tz = settings.renewal_tzinfo

    scheduler = AsyncIOScheduler(timezone=tz)

    # Daily renewal at local wall-clock time; a run missed while the
    # process was down is not replayed, the next run catches up
    scheduler.add_job(
        automatic_renewal_job,
        trigger=CronTrigger(hour=settings.renewal_hour, minute=settings.renewal_minute, timezone=tz),
        id=RENEWAL_JOB_ID,
        name="Automatic license renewal",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=3600,
    )

    scheduler.start()
    _scheduler = scheduler
    _store = store
    logger.info(
        f"Background scheduler started, automatic renewal daily at "
        f"{settings.renewal_hour:02d}:{settings.renewal_minute:02d} {settings.renewal_timezone}"
    )
    return scheduler


async def stop_scheduler() -> None:
    """Stop the background task scheduler."""
    global _scheduler, _store

    if _scheduler:
        _scheduler.shutdown(wait=False)
        _scheduler = None
        _store = None
        logger.info("Background scheduler stopped")


def get_next_renewal_time() -> datetime | None:
    """Next scheduled renewal run, or None when the scheduler is stopped."""
    if _scheduler is None:
        return None
    job = _scheduler.get_job(RENEWAL_JOB_ID)
    return job.next_run_time if job else None
