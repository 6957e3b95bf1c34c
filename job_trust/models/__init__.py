"""ORM models for the job trust engine."""

from .base import (
    DEFAULT_DATABASE_URL,
    Base,
    SessionLocal,
    create_db_engine,
    engine,
    init_db,
    make_session_factory,
    normalize_database_url,
)
from .job_application import JobApplication
from .job_feedback import COMMENT_MAX_LENGTH, FeedbackType, JobFeedback
from .job_posting import NEUTRAL_SCORE, JobPosting, JobSource, JobStatus
from .user import User, UserRole, UserTier

__all__ = [
    "Base",
    "SessionLocal",
    "engine",
    "init_db",
    "create_db_engine",
    "make_session_factory",
    "normalize_database_url",
    "DEFAULT_DATABASE_URL",
    "User",
    "UserRole",
    "UserTier",
    "JobPosting",
    "JobSource",
    "JobStatus",
    "NEUTRAL_SCORE",
    "JobApplication",
    "JobFeedback",
    "FeedbackType",
    "COMMENT_MAX_LENGTH",
]
