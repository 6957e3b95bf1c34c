"""Per-request DB session, repository and session-cookie identity."""

from collections.abc import Generator

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from job_trust.models import User
from job_trust.storage.repository import TrustRepository


def get_db(request: Request) -> Generator[Session, None, None]:
    """Open a session on the database the app was configured with."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_repo(db: Session = Depends(get_db)) -> TrustRepository:
    return TrustRepository(db)


def get_current_user(request: Request, db: Session) -> User | None:
    user_id = request.session.get("user_id")
    if user_id is None:
        return None
    user = db.get(User, user_id)
    if user is None or not user.is_active:
        return None
    return user


def require_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Feedback submission is limited to signed-in, active accounts."""
    user = get_current_user(request, db)
    if user is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user
