"""Job trust routes — read the derived trust fields of a posting."""

from fastapi import APIRouter, Depends

from job_trust.errors import NotFoundError
from job_trust.storage.repository import TrustRepository

from .dependencies import get_repo

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("/{job_id}/trust")
def get_job_trust(job_id: int, repo: TrustRepository = Depends(get_repo)):
    job = repo.get_job(job_id)
    if job is None:
        raise NotFoundError("Job not found")
    return {"success": True, "data": job.trust_summary()}
