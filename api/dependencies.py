"""
API dependencies for dependency injection
"""

from typing import Generator, Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import UnauthorizedError
from domain.models import get_db_session, SessionLocal, User
from services.session_service import SessionService


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_session_token(request: Request) -> Optional[str]:
    """Read the session token from the configured cookie"""
    return request.cookies.get(settings.session_cookie_name)


def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the caller before any owned data is touched.

    Raises UnauthorizedError, which the registered handler turns into
    401 ``{"error": "Unauthorized"}``. Declared as a dependency so it runs
    ahead of body field validation. Bodies that are not JSON at all fail
    before dependencies run; see ``has_valid_session``.
    """
    return SessionService.resolve(db, token)


def requires_session(request: Request) -> bool:
    """Whether the matched route depends on ``get_current_user``"""
    dependant = getattr(request.scope.get("route"), "dependant", None)
    pending = list(dependant.dependencies) if dependant is not None else []
    while pending:
        dependency = pending.pop()
        if dependency.call is get_current_user:
            return True
        pending.extend(dependency.dependencies)
    return False


def has_valid_session(request: Request) -> bool:
    """
    Check the request's session cookie outside the dependency graph.

    Used by the validation handler, which can fire before ``get_current_user``.
    """
    db = SessionLocal()
    try:
        SessionService.resolve(db, get_session_token(request))
        return True
    except UnauthorizedError:
        return False
    finally:
        db.close()
