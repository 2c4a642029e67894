"""
User Repository - Data access layer for users and their sessions
"""

from typing import Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import User, UserSession


class UserRepository(BaseRepository[User]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        return self.db.query(User).filter(User.user_id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email, ignoring case"""
        return (
            self.db.query(User)
            .filter(func.lower(User.email) == email.lower())
            .first()
        )

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None


class SessionRepository(BaseRepository[UserSession]):
    """Repository for session tokens"""

    def __init__(self, db: Session):
        super().__init__(db, UserSession)

    def get_by_id(self, token: str) -> Optional[UserSession]:
        """Get session by its token"""
        return self.db.query(UserSession).filter(UserSession.token == token).first()

    def get_user_by_token(self, token: str) -> Optional[User]:
        """Resolve a token straight to its owning user"""
        return (
            self.db.query(User)
            .join(UserSession, UserSession.user_id == User.user_id)
            .filter(UserSession.token == token)
            .first()
        )
