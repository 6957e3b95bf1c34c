"""Shared fixtures: in-memory database, repository and entity factories."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from job_trust.models import JobApplication, JobPosting, User, init_db
from job_trust.storage.repository import TrustRepository

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def repo(session):
    return TrustRepository(session)


@pytest.fixture
def make_user(session):
    counter = {"n": 0}

    def _make(**kwargs):
        counter["n"] += 1
        kwargs.setdefault("email", f"user{counter['n']}@example.com")
        user = User(**kwargs)
        session.add(user)
        session.commit()
        return user

    return _make


@pytest.fixture
def make_job(repo, session):
    def _make(**kwargs):
        kwargs.setdefault("title", "Backend Engineer")
        kwargs.setdefault("company", "Acme Inc")
        kwargs.setdefault("url", "")
        job = repo.add_job(JobPosting(**kwargs))
        session.commit()
        return job

    return _make


@pytest.fixture
def make_application(session):
    def _make(user, **kwargs):
        kwargs.setdefault("job_title", "Data Engineer")
        kwargs.setdefault("company_name", "Globex")
        application = JobApplication(user_id=user.id, **kwargs)
        session.add(application)
        session.commit()
        return application

    return _make
