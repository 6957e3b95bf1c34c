"""APScheduler setup — optional daily refresh of time-decayed trust scores.

Feedback only moves between decay tiers when its job is recomputed, so a job
with no new submissions keeps its old score. The refresh sweep recomputes
every job with feedback once a day. Submissions never depend on it.
"""

import logging
import traceback

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED, EVENT_JOB_MISSED
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from job_trust.config import DecayRefreshConfig

logger = logging.getLogger("job_trust.scheduler")

REFRESH_JOB_ID = "trust_decay_refresh"

_scheduler: BackgroundScheduler | None = None


def _job_listener(event):
    """Log scheduler job events for debugging."""
    if event.exception:
        logger.error("Scheduled job %s FAILED: %s", event.job_id, event.exception)
        logger.error("Traceback: %s", event.traceback)
    elif hasattr(event, "job_id"):
        if event.code == EVENT_JOB_MISSED:
            logger.warning("Scheduled job %s MISSED its fire time", event.job_id)
        else:
            logger.info("Scheduled job %s executed successfully", event.job_id)


def init_scheduler() -> None:
    global _scheduler
    if _scheduler is not None:
        return
    _scheduler = BackgroundScheduler()
    _scheduler.add_listener(_job_listener, EVENT_JOB_EXECUTED | EVENT_JOB_ERROR | EVENT_JOB_MISSED)
    _scheduler.start()
    logger.info("APScheduler started")


def shutdown_scheduler() -> None:
    global _scheduler
    if _scheduler is not None:
        _scheduler.shutdown(wait=False)
        _scheduler = None
        logger.info("APScheduler stopped")


def run_decay_refresh(session_factory=None) -> dict:
    """Recompute all jobs in a fresh unit of work on ``session_factory``."""
    from job_trust.models import SessionLocal
    from job_trust.storage.repository import trust_uow
    from job_trust.trust.service import recompute_all_jobs

    logger.info("=== Decay refresh starting ===")
    try:
        with trust_uow(session_factory or SessionLocal) as repo:
            result = recompute_all_jobs(repo)
    except Exception:
        logger.error("=== Decay refresh FAILED ===\n%s", traceback.format_exc())
        raise
    logger.info("=== Decay refresh complete ===")
    return result


def schedule_decay_refresh(config: DecayRefreshConfig, session_factory=None) -> None:
    """Add, update, or remove the daily decay refresh job."""
    if _scheduler is None:
        init_scheduler()

    existing = _scheduler.get_job(REFRESH_JOB_ID)
    if existing:
        _scheduler.remove_job(REFRESH_JOB_ID)
        logger.info("Removed existing decay refresh schedule")

    if not config.enabled:
        return

    trigger = CronTrigger(hour=config.hour, minute=config.minute, timezone=config.timezone)
    _scheduler.add_job(
        run_decay_refresh,
        trigger=trigger,
        args=[session_factory],
        id=REFRESH_JOB_ID,
        name="Trust score decay refresh",
        misfire_grace_time=3600,
        coalesce=True,
        replace_existing=True,
    )
    logger.info("Scheduled decay refresh at %s", trigger)


def get_scheduler_info() -> dict:
    """Return diagnostic info about the scheduler state."""
    if _scheduler is None:
        return {"running": False, "jobs": []}
    jobs = []
    for job in _scheduler.get_jobs():
        jobs.append({
            "id": job.id,
            "name": job.name,
            "next_run_time": str(job.next_run_time) if job.next_run_time else None,
            "trigger": str(job.trigger),
        })
    return {
        "running": _scheduler.running,
        "jobs": jobs,
    }
