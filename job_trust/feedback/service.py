"""Feedback submission and listing.

Submitting feedback persists the row first and then recomputes the job's
trust fields and the submitter's reputation in the same request, so a client
that re-fetches the job right away sees the new score. A failed recompute is
logged and never fails the submission: the feedback row is the durable fact
and the score can always be rebuilt from it.
"""

import logging
import math
import traceback
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError

from job_trust.errors import ConflictError, InternalError, NotFoundError, TrustError, ValidationError
from job_trust.models import COMMENT_MAX_LENGTH, JobFeedback
from job_trust.trust.reputation import update_user_reputation
from job_trust.trust.service import update_job_authenticity_score
from job_trust.trust.weights import get_user_weight

from .models import FeedbackSubmission
from .resolver import resolve_job_id

logger = logging.getLogger("job_trust.feedback")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def _recompute_after_write(repo, job_id: int, user_id: int, now: datetime) -> None:
    try:
        update_job_authenticity_score(repo, job_id, now=now)
        update_user_reputation(repo, user_id)
        repo.commit()
    except Exception:
        repo.rollback()
        logger.error(
            "Error updating trust scores for job %s / user %s\n%s",
            job_id, user_id, traceback.format_exc(),
        )


def submit_feedback(
    repo,
    submission: FeedbackSubmission,
    user_id: int,
    now: datetime | None = None,
    comment_max_length: int | None = None,
) -> JobFeedback:
    """Validate, resolve, deduplicate and persist one feedback row."""
    now = now or datetime.now(timezone.utc)
    submission.validate(comment_max_length or COMMENT_MAX_LENGTH)

    try:
        job_id = resolve_job_id(repo, submission, user_id)

        if repo.get_job(job_id) is None:
            raise NotFoundError("Job not found")

        if repo.find_feedback(job_id, user_id) is not None:
            raise ConflictError("You have already reviewed this job.")

        # Frozen at creation; never recomputed from later reputation changes
        weight = get_user_weight(repo.get_user(user_id))

        feedback = repo.add_feedback(JobFeedback(
            job_id=job_id,
            user_id=user_id,
            job_application_id=submission.job_application_id,
            feedback_type=submission.feedback_type,
            is_real=submission.is_real,
            is_responsive=submission.is_responsive,
            did_interview=submission.did_interview,
            asked_for_money=submission.asked_for_money,
            comment=submission.comment,
            user_weight_at_creation=weight,
            created_at=now,
        ))
        repo.commit()
    except TrustError:
        repo.rollback()
        raise
    except SQLAlchemyError as e:
        repo.rollback()
        logger.error("Feedback persistence failed for user %s\n%s", user_id, traceback.format_exc())
        raise InternalError("Could not save feedback") from e

    logger.info(
        "Feedback %s saved: job=%s user=%s type=%s weight=%.2f",
        feedback.id, job_id, user_id, feedback.feedback_type, weight,
    )

    _recompute_after_write(repo, job_id, user_id, now)
    return feedback


def remove_feedback(repo, feedback_id: int, now: datetime | None = None) -> None:
    """Delete a feedback row (moderation) and recompute the job it belonged to."""
    feedback = repo.get_feedback(feedback_id)
    if feedback is None:
        raise NotFoundError("Feedback not found")

    job_id, user_id = feedback.job_id, feedback.user_id
    repo.delete_feedback(feedback)
    repo.commit()
    logger.info("Feedback %s removed from job %s", feedback_id, job_id)

    _recompute_after_write(repo, job_id, user_id, now or datetime.now(timezone.utc))


def list_job_feedback(
    repo,
    job_id: int,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE,
) -> dict:
    """Return a newest-first page of feedback with each submitter's public profile."""
    if page < 1:
        raise ValidationError("page must be at least 1")
    if not 1 <= limit <= max_limit:
        raise ValidationError(f"limit must be between 1 and {max_limit}")
    if repo.get_job(job_id) is None:
        raise NotFoundError("Job not found")

    total = repo.count_feedback_for_job(job_id)
    reviews = []
    for feedback, user in repo.page_feedback_for_job(job_id, page, limit):
        item = feedback.to_dict()
        # Rows outlive deleted accounts; they still count toward the score
        item["user"] = None if user is None else {
            "id": user.id,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "reputation_score": user.reputation_score,
        }
        reviews.append(item)

    return {
        "reviews": reviews,
        "pagination": {
            "total": total,
            "page": page,
            "pages": math.ceil(total / limit),
        },
    }
