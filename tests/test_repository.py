"""Tests for the repository's narrow trust-field writes and stats."""

import pytest

from conftest import NOW
from job_trust.errors import ValidationError
from job_trust.models import JobFeedback, JobPosting
from job_trust.storage.repository import trust_uow


class TestUpdateTrustFields:
    def test_writes_only_derived_fields(self, repo, make_job):
        job = make_job(title="Platform Engineer", status="approved")

        repo.update_trust_fields(job.id, 88, ["verified"], 5, last_review_date=NOW)

        stored = repo.get_job(job.id)
        assert stored.authenticity_score == 88
        assert stored.trust_badges == ["verified"]
        assert stored.review_count == 5
        assert stored.title == "Platform Engineer"
        assert stored.status == "approved"

    @pytest.mark.parametrize("score", [-1, 101])
    def test_rejects_out_of_range_score(self, repo, make_job, score):
        job = make_job()
        with pytest.raises(ValidationError):
            repo.update_trust_fields(job.id, score, [], 0)

    def test_rejects_unknown_badge(self, repo, make_job):
        job = make_job()
        with pytest.raises(ValidationError):
            repo.update_trust_fields(job.id, 50, ["gold_star"], 1)

    def test_rejects_negative_review_count(self, repo, make_job):
        job = make_job()
        with pytest.raises(ValidationError):
            repo.update_trust_fields(job.id, 50, [], -1)

    def test_loaded_instance_sees_new_values(self, repo, make_job):
        job = make_job()
        stored = repo.get_job(job.id)
        assert stored.last_review_date is None

        repo.update_trust_fields(job.id, 70, ["verified"], 2, last_review_date=NOW)

        assert stored.authenticity_score == 70
        assert stored.trust_badges == ["verified"]
        assert stored.review_count == 2
        assert stored.last_review_date.replace(tzinfo=None) == NOW.replace(tzinfo=None)

    def test_omitted_review_date_left_alone(self, repo, make_job):
        job = make_job()
        repo.update_trust_fields(job.id, 70, [], 1, last_review_date=NOW)
        repo.update_trust_fields(job.id, 50, [], 0)

        stored = repo.get_job(job.id)
        assert stored.review_count == 0
        assert stored.last_review_date is not None


class TestSetUserReputation:
    def test_loaded_user_sees_new_score(self, repo, make_user):
        user = make_user()
        repo.set_user_reputation(user.id, 42.0)
        assert user.reputation_score == 42.0

    def test_rejects_out_of_range(self, repo, make_user):
        user = make_user()
        with pytest.raises(ValidationError):
            repo.set_user_reputation(user.id, 100.5)


class TestAddJob:
    def test_canonical_url_derived(self, repo, make_job):
        job = make_job(url="HTTPS://Example.com/jobs/1/")
        assert job.canonical_url == "https://example.com/jobs/1"
        assert repo.find_job_by_url("https://example.com/jobs/1#x").id == job.id

    def test_blank_url_never_matches(self, repo, make_job):
        make_job(url="")
        assert repo.find_job_by_url("") is None

    def test_direct_insert_derives_canonical_url(self, repo, session):
        job = JobPosting(title="QA", company="Hooli", url=" https://Hooli.com:443/careers/7 ")
        session.add(job)
        session.commit()

        assert job.canonical_url == "https://hooli.com/careers/7"
        assert repo.find_job_by_url("https://hooli.com/careers/7").id == job.id

    def test_canonical_url_follows_url_edits(self, repo, session, make_job):
        job = make_job(url="https://example.com/jobs/1")
        job.url = "https://example.com/jobs/2"
        session.commit()

        assert job.canonical_url == "https://example.com/jobs/2"
        assert repo.find_job_by_url("https://example.com/jobs/1") is None
        assert repo.find_job_by_url("https://example.com/jobs/2").id == job.id


class TestStats:
    def test_counts(self, repo, session, make_user, make_job):
        job = make_job(source="user", review_count=1, trust_badges=["scam_warning"])
        make_job(is_locked=True)
        session.add(JobFeedback(
            job_id=job.id, user_id=make_user().id, feedback_type="scam",
            is_real=True, user_weight_at_creation=1.0, created_at=NOW,
        ))
        session.commit()

        stats = repo.get_stats()

        assert stats["total_jobs"] == 2
        assert stats["shadow_jobs"] == 1
        assert stats["locked_jobs"] == 1
        assert stats["total_feedback"] == 1
        assert stats["by_badge"]["scam_warning"] == 1
        assert stats["by_feedback_type"] == {"scam": 1}


class TestTrustUow:
    def test_commits_on_success(self, session_factory):
        with trust_uow(session_factory) as repo:
            repo.add_job(JobPosting(title="Committed", url="https://a.example.com/1"))

        with trust_uow(session_factory) as repo:
            assert repo.find_job_by_url("https://a.example.com/1") is not None

    def test_rolls_back_on_error(self, session_factory):
        with pytest.raises(RuntimeError):
            with trust_uow(session_factory) as repo:
                repo.add_job(JobPosting(title="Lost", url="https://a.example.com/2"))
                raise RuntimeError("abort")

        with trust_uow(session_factory) as repo:
            assert repo.find_job_by_url("https://a.example.com/2") is None
