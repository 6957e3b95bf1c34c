"""Engine and session factories for the trust store."""

import os
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker

DEFAULT_DATABASE_URL = "sqlite:///data/job_trust.db"


def normalize_database_url(url: str) -> str:
    # Heroku-style URLs use postgres:// but SQLAlchemy 2.x requires postgresql://
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


def create_db_engine(url: str) -> Engine:
    """Build an engine for ``url``; SQLite connections may cross worker threads."""
    url = normalize_database_url(url)
    connect_args = {}
    if make_url(url).get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


engine = create_db_engine(os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL))

SessionLocal = make_session_factory(engine)


class Base(DeclarativeBase):
    pass


def init_db(bind=None) -> None:
    """Create all tables on the given engine (defaults to the configured one)."""
    # Import side effect registers every mapped class on Base.metadata
    from job_trust import models  # noqa: F401

    bind = bind or engine
    database = bind.url.database
    if bind.url.get_backend_name() == "sqlite" and database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=bind)
