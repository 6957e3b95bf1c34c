"""Job posting model — carries the derived trust fields."""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from job_trust.utils.urls import canonicalize_url

from .base import Base

NEUTRAL_SCORE = 50


class JobSource(str, Enum):
    SCRAPER = "scraper"
    USER = "user"
    ADMIN = "admin"


class JobStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class JobPosting(Base):
    __tablename__ = "job_postings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(500), default="")
    company: Mapped[str] = mapped_column(String(255), default="")
    location: Mapped[str] = mapped_column(String(255), default="")
    country: Mapped[str] = mapped_column(String(100), default="")
    description: Mapped[str] = mapped_column(Text, default="")
    url: Mapped[str] = mapped_column(String(2048), default="")
    canonical_url: Mapped[str] = mapped_column(String(2048), default="", index=True)
    source: Mapped[str] = mapped_column(String(20), default=JobSource.SCRAPER.value)
    status: Mapped[str] = mapped_column(String(20), default=JobStatus.PENDING.value)
    owner_user_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.id"), nullable=True)

    # Derived by the trust aggregator only
    authenticity_score: Mapped[int] = mapped_column(Integer, default=NEUTRAL_SCORE)
    trust_badges: Mapped[list] = mapped_column(JSON, default=list)
    review_count: Mapped[int] = mapped_column(Integer, default=0)
    last_review_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    is_locked: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    feedback: Mapped[list["JobFeedback"]] = relationship(back_populates="job")

    @validates("url")
    def _sync_canonical_url(self, key, url):
        # Every write to url keeps the dedup key in step, however the row is created
        self.canonical_url = canonicalize_url(url)
        return url

    def trust_summary(self) -> dict:
        return {
            "job_id": self.id,
            "authenticity_score": self.authenticity_score,
            "trust_badges": list(self.trust_badges or []),
            "review_count": self.review_count,
            "last_review_date": self.last_review_date.isoformat() if self.last_review_date else None,
            "is_locked": self.is_locked,
        }
