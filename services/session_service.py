"""Session Service - resolves an opaque session token to its user"""

import logging
from typing import Optional
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import UnauthorizedError
from domain.models import User
from repositories import SessionRepository

logger = logging.getLogger("dailydiet.session")


class SessionService:
    @staticmethod
    def resolve(db: Session, token: Optional[str]) -> User:
        """
        Return the user owning ``token``.

        Raises:
            UnauthorizedError: token is absent, malformed or unknown
        """
        if not isinstance(token, str) or not token.strip():
            logger.debug("session_rejected reason=missing")
            raise UnauthorizedError()
        if len(token) > settings.session_token_max_length:
            logger.debug("session_rejected reason=malformed")
            raise UnauthorizedError()

        user = SessionRepository(db).get_user_by_token(token)
        if user is None:
            logger.info("session_rejected reason=unknown_token")
            raise UnauthorizedError()
        return user
