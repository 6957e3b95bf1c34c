"""Tracked job application — back-linked to a shadow posting during resolution."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class JobApplication(Base):
    __tablename__ = "job_applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    job_posting_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("job_postings.id"), nullable=True
    )
    job_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    job_title: Mapped[str] = mapped_column(String(500), default="")
    company_name: Mapped[str] = mapped_column(String(255), default="")
    job_city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    job_country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    job_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped["User"] = relationship(back_populates="applications")
