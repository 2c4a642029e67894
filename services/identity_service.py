"""
Identity Service - user registration and session issuance.

Registration is the only way to obtain a session: the user row and its
session token are written in one transaction.
"""

import logging
import secrets
from typing import Tuple
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.config import settings
from app.exceptions import ConflictError, ServiceValidationError
from domain.models import User, UserSession
from repositories import UserRepository, SessionRepository

logger = logging.getLogger("dailydiet.identity")

USER_EXISTS_MESSAGE = "User already exists"


class IdentityService:
    """Business logic for user registration"""

    @staticmethod
    def new_token() -> str:
        """Generate an opaque, unguessable session token"""
        return secrets.token_urlsafe(settings.session_token_bytes)

    @staticmethod
    def _validate(name, email) -> None:
        errors = {}
        if not isinstance(name, str) or not name.strip():
            errors["name"] = "must be a non-empty string"
        if not isinstance(email, str) or "@" not in email:
            errors["email"] = "must be an email address"
        if errors:
            raise ServiceValidationError(
                "Invalid user data", details=errors, code="INVALID_USER"
            )

    @staticmethod
    def register(db: Session, name: str, email: str) -> Tuple[User, UserSession]:
        """
        Create a user and issue its session.

        Returns:
            (user, session) so the caller can emit ``session.token`` as a cookie

        Raises:
            ServiceValidationError: name or email is not a well-formed string
            ConflictError: email already belongs to another user
        """
        IdentityService._validate(name, email)

        user_repo = UserRepository(db)
        if user_repo.email_exists(email):
            logger.info("registration_rejected reason=duplicate_email")
            raise ConflictError(USER_EXISTS_MESSAGE, code="USER_EXISTS")

        try:
            user = user_repo.add(User(name=name, email=email))
            session = SessionRepository(db).add(
                UserSession(token=IdentityService.new_token(), user_id=user.user_id)
            )
            db.commit()
        except IntegrityError:
            # lost a race against a concurrent registration with the same email
            db.rollback()
            logger.info("registration_rejected reason=unique_violation")
            raise ConflictError(USER_EXISTS_MESSAGE, code="USER_EXISTS")

        db.refresh(user)
        logger.info(f"user_registered user_id={user.user_id}")
        return user, session
