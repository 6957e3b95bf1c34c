"""Job feedback model — one row per (job, user), never mutated after creation."""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

COMMENT_MAX_LENGTH = 500


class FeedbackType(str, Enum):
    RESPONSE = "response"
    INTERVIEW = "interview"
    SCAM = "scam"
    EXPIRED = "expired"
    HIRED = "hired"
    GHOSTED = "ghosted"
    REJECTED = "rejected"
    PAYMENT_REQUIRED = "payment_required"


class JobFeedback(Base):
    __tablename__ = "job_feedback"
    __table_args__ = (
        UniqueConstraint("job_id", "user_id", name="uq_feedback_job_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    job_id: Mapped[int] = mapped_column(Integer, ForeignKey("job_postings.id"), nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    job_application_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("job_applications.id"), nullable=True
    )

    feedback_type: Mapped[str] = mapped_column(String(32), nullable=False)
    is_real: Mapped[bool] = mapped_column(Boolean, nullable=False)
    is_responsive: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    did_interview: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    asked_for_money: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    comment: Mapped[str | None] = mapped_column(String(COMMENT_MAX_LENGTH), nullable=True)

    # Snapshot of the submitter's weight; later reputation changes never touch it
    user_weight_at_creation: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True
    )

    job: Mapped["JobPosting"] = relationship(back_populates="feedback")
    user: Mapped["User"] = relationship(back_populates="feedback")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "job_id": self.job_id,
            "user_id": self.user_id,
            "job_application_id": self.job_application_id,
            "feedback_type": self.feedback_type,
            "is_real": self.is_real,
            "is_responsive": self.is_responsive,
            "did_interview": self.did_interview,
            "asked_for_money": self.asked_for_money,
            "comment": self.comment,
            "user_weight_at_creation": self.user_weight_at_creation,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
