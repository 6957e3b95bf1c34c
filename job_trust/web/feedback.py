"""Feedback routes — submit and list job reviews."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from job_trust.feedback.models import FeedbackSubmission
from job_trust.feedback.service import list_job_feedback, submit_feedback
from job_trust.models import FeedbackType, User
from job_trust.storage.repository import TrustRepository

from .dependencies import get_repo, require_user

router = APIRouter(prefix="/api", tags=["feedback"])


class FeedbackRequest(BaseModel):
    """Request to submit feedback about a job."""
    job_id: Optional[int] = Field(None, description="Job posting being reviewed")
    job_application_id: Optional[int] = Field(
        None, description="Tracked application, used when the job id is unknown"
    )
    feedback_type: FeedbackType
    is_real: bool = Field(..., description="Whether the posting is a real job")
    is_responsive: Optional[bool] = None
    did_interview: Optional[bool] = None
    asked_for_money: Optional[bool] = None
    comment: Optional[str] = None


@router.post("/feedback")
def create_feedback(
    request: Request,
    body: FeedbackRequest,
    user: User = Depends(require_user),
    repo: TrustRepository = Depends(get_repo),
):
    submission = FeedbackSubmission(
        feedback_type=body.feedback_type.value,
        is_real=body.is_real,
        job_id=body.job_id,
        job_application_id=body.job_application_id,
        is_responsive=body.is_responsive,
        did_interview=body.did_interview,
        asked_for_money=body.asked_for_money,
        comment=body.comment,
    )
    config = request.app.state.config
    feedback = submit_feedback(
        repo, submission, user.id, comment_max_length=config.feedback.comment_max_length
    )
    return JSONResponse(status_code=201, content={"success": True, "data": feedback.to_dict()})


@router.get("/jobs/{job_id}/feedback")
def get_job_feedback(
    request: Request,
    job_id: int,
    page: int = Query(default=1, description="1-based page number"),
    limit: Optional[int] = Query(default=None, description="Reviews per page"),
    repo: TrustRepository = Depends(get_repo),
):
    config = request.app.state.config
    data = list_job_feedback(
        repo,
        job_id,
        page=page,
        limit=limit if limit is not None else config.feedback.default_page_size,
        max_limit=config.feedback.max_page_size,
    )
    return {"success": True, "data": data}
