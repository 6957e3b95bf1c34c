"""Feedback submission data model."""

from dataclasses import dataclass
from typing import Optional

from job_trust.errors import ValidationError
from job_trust.models import COMMENT_MAX_LENGTH, FeedbackType

_FEEDBACK_TYPES = {t.value for t in FeedbackType}


@dataclass
class FeedbackSubmission:
    """A user's feedback about a job, before it is resolved and persisted."""

    feedback_type: str
    is_real: Optional[bool]
    job_id: Optional[int] = None
    job_application_id: Optional[int] = None
    is_responsive: Optional[bool] = None
    did_interview: Optional[bool] = None
    asked_for_money: Optional[bool] = None
    comment: Optional[str] = None

    def validate(self, comment_max_length: int = COMMENT_MAX_LENGTH):
        """Raise ValidationError for malformed submissions."""
        if self.job_id is None and self.job_application_id is None:
            raise ValidationError("Missing Job ID or valid application link.")
        if self.feedback_type not in _FEEDBACK_TYPES:
            raise ValidationError(f"Invalid feedback type: {self.feedback_type!r}")
        if not isinstance(self.is_real, bool):
            raise ValidationError("is_real must be true or false.")
        if self.comment is not None and len(self.comment) > comment_max_length:
            raise ValidationError(f"Comment must be at most {comment_max_length} characters.")
