"""Tests for the decay refresh schedule."""

import pytest

from job_trust import scheduler
from job_trust.config import DecayRefreshConfig
from job_trust.models import JobPosting


@pytest.fixture(autouse=True)
def clean_scheduler():
    yield
    scheduler.shutdown_scheduler()


class TestScheduleDecayRefresh:
    def test_enabled_registers_job(self):
        scheduler.schedule_decay_refresh(DecayRefreshConfig(enabled=True, hour=2, minute=30))

        info = scheduler.get_scheduler_info()
        assert info["running"] is True
        assert [job["id"] for job in info["jobs"]] == [scheduler.REFRESH_JOB_ID]

    def test_disabled_removes_job(self):
        scheduler.schedule_decay_refresh(DecayRefreshConfig(enabled=True))
        scheduler.schedule_decay_refresh(DecayRefreshConfig(enabled=False))

        assert scheduler.get_scheduler_info()["jobs"] == []

    def test_info_when_stopped(self):
        assert scheduler.get_scheduler_info() == {"running": False, "jobs": []}


class TestRunDecayRefresh:
    def test_uses_given_session_factory(self, session_factory, make_job):
        job = make_job(review_count=2, authenticity_score=80, trust_badges=["verified"])

        result = scheduler.run_decay_refresh(session_factory)

        assert result == {"updated": 1, "skipped": 0, "failed": 0}
        db = session_factory()
        stored = db.get(JobPosting, job.id)
        assert stored.authenticity_score == 50
        assert stored.review_count == 0
        db.close()
