"""Tests for resolving submissions to job postings."""

import pytest

from job_trust.errors import NotFoundError, ValidationError
from job_trust.feedback.models import FeedbackSubmission
from job_trust.feedback.resolver import resolve_job_id
from job_trust.models import JobPosting


def _submission(**kwargs):
    kwargs.setdefault("feedback_type", "response")
    kwargs.setdefault("is_real", True)
    return FeedbackSubmission(**kwargs)


class TestResolveJobId:
    def test_explicit_job_id_used_directly(self, repo, make_user):
        user = make_user()
        assert resolve_job_id(repo, _submission(job_id=77), user.id) == 77

    def test_missing_application_raises(self, repo, make_user):
        user = make_user()
        with pytest.raises(NotFoundError):
            resolve_job_id(repo, _submission(job_application_id=404), user.id)

    def test_linked_application_uses_its_posting(self, repo, make_user, make_job, make_application):
        user = make_user()
        job = make_job()
        application = make_application(user, job_posting_id=job.id)
        assert resolve_job_id(repo, _submission(job_application_id=application.id), user.id) == job.id

    def test_existing_posting_found_by_url(self, repo, make_user, make_job, make_application):
        user = make_user()
        job = make_job(url="https://jobs.example.com/42", source="scraper")
        application = make_application(user, job_url="https://JOBS.example.com/42/")

        assert resolve_job_id(repo, _submission(job_application_id=application.id), user.id) == job.id
        assert repo.db.query(JobPosting).count() == 1
        assert application.job_posting_id == job.id

    def test_shadow_posting_materialized(self, repo, make_user, make_application):
        user = make_user()
        application = make_application(
            user,
            job_url="https://careers.globex.com/roles/9",
            job_city="Berlin",
            job_title="Data Engineer",
            company_name="Globex",
        )

        job_id = resolve_job_id(repo, _submission(job_application_id=application.id), user.id)
        job = repo.get_job(job_id)

        assert job.source == "user"
        assert job.status == "approved"
        assert job.owner_user_id == user.id
        assert job.title == "Data Engineer"
        assert job.company == "Globex"
        assert job.location == "Berlin"
        assert job.country == "Unknown"
        assert job.description == "Auto-generated from application tracking."
        assert job.authenticity_score == 50
        assert application.job_posting_id == job_id

    def test_same_url_resolves_to_single_shadow(self, repo, make_user, make_application):
        alice, bob = make_user(), make_user()
        first = make_application(alice, job_url="https://careers.globex.com/roles/9")
        second = make_application(bob, job_url="https://careers.globex.com/roles/9#top")

        job_a = resolve_job_id(repo, _submission(job_application_id=first.id), alice.id)
        job_b = resolve_job_id(repo, _submission(job_application_id=second.id), bob.id)

        assert job_a == job_b
        assert repo.db.query(JobPosting).count() == 1

    def test_posting_inserted_directly_found_by_url(self, repo, session, make_user, make_application):
        job = JobPosting(
            title="Site Reliability Engineer",
            company="Initech",
            url="https://jobs.example.com/42",
            source="scraper",
        )
        session.add(job)
        session.commit()
        user = make_user()
        application = make_application(user, job_url="https://jobs.example.com/42")

        assert resolve_job_id(repo, _submission(job_application_id=application.id), user.id) == job.id
        assert repo.db.query(JobPosting).count() == 1

    def test_edited_posting_url_followed(self, repo, session, make_user, make_job, make_application):
        job = make_job(url="https://jobs.example.com/old")
        job.url = "https://jobs.example.com/new"
        session.commit()
        user = make_user()
        application = make_application(user, job_url="https://jobs.example.com/new/")

        assert resolve_job_id(repo, _submission(job_application_id=application.id), user.id) == job.id
        assert repo.db.query(JobPosting).count() == 1

    def test_application_without_url_raises(self, repo, make_user, make_application):
        user = make_user()
        application = make_application(user, job_url=None)
        with pytest.raises(ValidationError):
            resolve_job_id(repo, _submission(job_application_id=application.id), user.id)

    def test_no_identifiers_raises(self, repo, make_user):
        user = make_user()
        with pytest.raises(ValidationError):
            resolve_job_id(repo, _submission(), user.id)
