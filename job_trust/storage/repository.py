"""SQLAlchemy-backed store for postings, applications, feedback and users."""

import contextlib
import logging
from collections.abc import Iterator
from datetime import datetime

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from job_trust.errors import ConflictError, ValidationError
from job_trust.models import (
    JobApplication,
    JobFeedback,
    JobPosting,
    JobSource,
    JobStatus,
    SessionLocal,
    User,
)
from job_trust.trust.badges import TrustBadge
from job_trust.utils.urls import canonicalize_url

logger = logging.getLogger("job_trust.storage")

_VALID_BADGES = {badge.value for badge in TrustBadge}

SHADOW_DESCRIPTION = "Auto-generated from application tracking."
UNKNOWN = "Unknown"


class TrustRepository:
    """Thin data-access layer used by the feedback and trust services."""

    def __init__(self, db: Session):
        self.db = db

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def _narrow_update(self, model, pk: int, values: dict) -> None:
        """UPDATE only the given columns, then expire them on any loaded instance."""
        self.db.execute(
            update(model).where(model.id == pk).values(**values),
            execution_options={"synchronize_session": False},
        )
        loaded = self.db.identity_map.get(self.db.identity_key(model, pk))
        if loaded is not None:
            self.db.expire(loaded, list(values))

    # Users

    def get_user(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def set_user_reputation(self, user_id: int, score: float) -> None:
        if not 0 <= score <= 100:
            raise ValidationError(f"Reputation out of range: {score}")
        self._narrow_update(User, user_id, {"reputation_score": score})

    # Job postings

    def get_job(self, job_id: int) -> JobPosting | None:
        return self.db.get(JobPosting, job_id)

    def find_job_by_url(self, url: str) -> JobPosting | None:
        canonical = canonicalize_url(url)
        if not canonical:
            return None
        return (
            self.db.query(JobPosting)
            .filter(JobPosting.canonical_url == canonical)
            .order_by(JobPosting.id)
            .first()
        )

    def add_job(self, job: JobPosting) -> JobPosting:
        """Insert a posting; its canonical URL is derived by the model."""
        self.db.add(job)
        self.db.flush()
        return job

    def create_shadow_job(self, application: JobApplication, owner_user_id: int) -> JobPosting:
        """Materialize a posting from a tracked application.

        Shadow postings are auto-approved since the submitter already has a
        tracked interaction with the job.
        """
        job = JobPosting(
            title=application.job_title or "",
            company=application.company_name or "",
            location=application.job_city or UNKNOWN,
            country=application.job_country or UNKNOWN,
            description=application.job_description or SHADOW_DESCRIPTION,
            url=application.job_url or "",
            source=JobSource.USER.value,
            status=JobStatus.APPROVED.value,
            owner_user_id=owner_user_id,
        )
        return self.add_job(job)

    def update_trust_fields(
        self,
        job_id: int,
        score: int,
        badges: list[str],
        review_count: int,
        last_review_date: datetime | None = None,
    ) -> None:
        """Write only the derived trust fields of a posting.

        ``last_review_date`` is left untouched when None.
        """
        if not 0 <= score <= 100:
            raise ValidationError(f"Authenticity score out of range: {score}")
        if review_count < 0:
            raise ValidationError(f"Negative review count: {review_count}")
        unknown = set(badges) - _VALID_BADGES
        if unknown:
            raise ValidationError(f"Unknown trust badges: {sorted(unknown)}")

        values = {
            "authenticity_score": score,
            "trust_badges": list(badges),
            "review_count": review_count,
        }
        if last_review_date is not None:
            values["last_review_date"] = last_review_date

        self._narrow_update(JobPosting, job_id, values)

    def job_ids_for_recompute(self) -> list[int]:
        """Postings that have feedback or still carry a non-neutral stored state."""
        with_feedback = self.db.query(JobFeedback.job_id)
        with_state = self.db.query(JobPosting.id).filter(JobPosting.review_count > 0)
        return sorted({row[0] for row in with_feedback.union(with_state).all()})

    # Applications

    def get_application(self, application_id: int) -> JobApplication | None:
        return self.db.get(JobApplication, application_id)

    def link_application(self, application: JobApplication, job_id: int) -> None:
        application.job_posting_id = job_id
        self.db.flush()

    # Feedback

    def find_feedback(self, job_id: int, user_id: int) -> JobFeedback | None:
        return (
            self.db.query(JobFeedback)
            .filter(JobFeedback.job_id == job_id, JobFeedback.user_id == user_id)
            .first()
        )

    def get_feedback(self, feedback_id: int) -> JobFeedback | None:
        return self.db.get(JobFeedback, feedback_id)

    def add_feedback(self, feedback: JobFeedback) -> JobFeedback:
        """Insert a feedback row; the (job, user) unique constraint decides races."""
        self.db.add(feedback)
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            logger.info(
                "Duplicate feedback rejected by constraint: job=%s user=%s",
                feedback.job_id, feedback.user_id,
            )
            raise ConflictError("You have already reviewed this job.") from e
        return feedback

    def delete_feedback(self, feedback: JobFeedback) -> None:
        self.db.delete(feedback)
        self.db.flush()

    def list_feedback_for_job(self, job_id: int) -> list[JobFeedback]:
        return self.db.query(JobFeedback).filter(JobFeedback.job_id == job_id).all()

    def count_feedback_for_job(self, job_id: int) -> int:
        return (
            self.db.query(func.count(JobFeedback.id))
            .filter(JobFeedback.job_id == job_id)
            .scalar()
            or 0
        )

    def page_feedback_for_job(
        self, job_id: int, page: int, limit: int
    ) -> list[tuple[JobFeedback, User | None]]:
        """Newest-first page of feedback with the submitting user, or None if gone."""
        return (
            self.db.query(JobFeedback, User)
            .outerjoin(User, User.id == JobFeedback.user_id)
            .filter(JobFeedback.job_id == job_id)
            .order_by(JobFeedback.created_at.desc(), JobFeedback.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )

    # Stats

    def get_stats(self) -> dict:
        stats = {
            "total_jobs": self.db.query(func.count(JobPosting.id)).scalar() or 0,
            "total_feedback": self.db.query(func.count(JobFeedback.id)).scalar() or 0,
            "shadow_jobs": self.db.query(func.count(JobPosting.id)).filter(
                JobPosting.source == JobSource.USER.value
            ).scalar() or 0,
            "locked_jobs": self.db.query(func.count(JobPosting.id)).filter(
                JobPosting.is_locked.is_(True)
            ).scalar() or 0,
        }

        by_badge = {badge.value: 0 for badge in TrustBadge}
        for (badges,) in self.db.query(JobPosting.trust_badges).filter(JobPosting.review_count > 0):
            for badge in badges or []:
                if badge in by_badge:
                    by_badge[badge] += 1
        stats["by_badge"] = by_badge

        rows = (
            self.db.query(JobFeedback.feedback_type, func.count(JobFeedback.id))
            .group_by(JobFeedback.feedback_type)
            .all()
        )
        stats["by_feedback_type"] = {feedback_type: count for feedback_type, count in rows}
        return stats


@contextlib.contextmanager
def trust_uow(session_factory=SessionLocal) -> Iterator[TrustRepository]:
    """Per-unit-of-work transaction scope.

    Yields a TrustRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.
    """
    session = session_factory()
    try:
        yield TrustRepository(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
