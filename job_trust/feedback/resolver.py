"""Resolves a feedback submission to a concrete job posting."""

import logging

from job_trust.errors import NotFoundError, ValidationError

from .models import FeedbackSubmission

logger = logging.getLogger("job_trust.feedback.resolver")


def resolve_job_id(repo, submission: FeedbackSubmission, user_id: int) -> int:
    """Return the job id a submission refers to.

    Falls back from an explicit job id to the tracked application's posting,
    then to a posting with the same canonical URL, and finally materializes a
    shadow posting owned by the submitter. Repeated submissions for one URL
    always land on the same posting.
    """
    if submission.job_id is not None:
        return submission.job_id

    if submission.job_application_id is None:
        raise ValidationError("Missing Job ID or valid application link.")

    application = repo.get_application(submission.job_application_id)
    if application is None:
        raise NotFoundError("Application not found")

    if application.job_posting_id is not None:
        return application.job_posting_id

    if not application.job_url:
        raise ValidationError("Missing Job ID or valid application link.")

    job = repo.find_job_by_url(application.job_url)
    if job is None:
        job = repo.create_shadow_job(application, owner_user_id=user_id)
        logger.info(
            "Created shadow job %s for application %s (%s)",
            job.id, application.id, application.job_url,
        )

    repo.link_application(application, job.id)
    return job.id
