"""User registration routes"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db
from app.config import settings
from domain.schemas.user_schemas import UserCreate, RegisterResponse
from domain.mappers import UserMapper
from services.identity_service import IdentityService

router = APIRouter(prefix="/user", tags=["Users"])
logger = logging.getLogger("dailydiet.api.users")


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_cookie_max_age,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


@router.post("", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register_user(payload: UserCreate, response: Response, db: Session = Depends(get_db)):
    """Register a user and start its session (sets the ``sessionId`` cookie)."""
    user, session = IdentityService.register(db, payload.name, payload.email)
    set_session_cookie(response, session.token)
    logger.info(f"Started session for user {user.user_id}")
    return RegisterResponse(user=UserMapper.to_response(user))
