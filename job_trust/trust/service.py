"""Read-full-set-then-write recompute of a job's trust fields."""

import logging
import traceback
from datetime import datetime, timezone

from .scoring import TrustSummary, summarize_feedback

logger = logging.getLogger("job_trust.trust")


def update_job_authenticity_score(repo, job_id: int, now: datetime | None = None) -> TrustSummary | None:
    """Recompute score, badges and review count for one job.

    Always re-reads the job's entire current feedback set, so concurrent
    recomputes converge on whichever finishes last. Returns the summary that
    was written, or None when the job is missing or locked.
    """
    now = now or datetime.now(timezone.utc)

    job = repo.get_job(job_id)
    if job is None:
        logger.warning("Trust update skipped: job %s not found", job_id)
        return None
    if job.is_locked:
        logger.info("Job %s is locked, skipping trust update", job_id)
        return None

    rows = repo.list_feedback_for_job(job_id)
    summary = summarize_feedback(rows, now)

    if summary.review_count == 0:
        # Losing every review reverts the job to neutral
        repo.update_trust_fields(job_id, summary.score, [], 0)
        logger.info("Job %s has no feedback, reset to neutral", job_id)
        return summary

    repo.update_trust_fields(
        job_id,
        summary.score,
        summary.badges,
        summary.review_count,
        last_review_date=now,
    )
    logger.info(
        "Updated job %s: score=%d reviews=%d badges=%s",
        job_id, summary.score, summary.review_count, ",".join(summary.badges) or "-",
    )
    return summary


def recompute_all_jobs(repo, now: datetime | None = None) -> dict:
    """Recompute every job with feedback or stale trust state.

    Per-job failures are logged and counted; the sweep carries on.
    """
    now = now or datetime.now(timezone.utc)
    result = {"updated": 0, "skipped": 0, "failed": 0}

    for job_id in repo.job_ids_for_recompute():
        try:
            summary = update_job_authenticity_score(repo, job_id, now=now)
            repo.commit()
        except Exception:
            repo.rollback()
            logger.error("Trust recompute failed for job %s\n%s", job_id, traceback.format_exc())
            result["failed"] += 1
            continue

        if summary is None:
            result["skipped"] += 1
        else:
            result["updated"] += 1

    logger.info(
        "Recompute sweep complete: %d updated, %d skipped, %d failed",
        result["updated"], result["skipped"], result["failed"],
    )
    return result
