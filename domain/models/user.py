"""
User and session database models.
"""

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class User(Base):
    """Registered user account"""

    __tablename__ = "app_user"

    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    # stored as given; uniqueness ignores case (see uq_app_user_email_lower)
    email = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    # Relationships
    sessions = relationship(
        "UserSession", back_populates="user", cascade="all, delete-orphan"
    )
    meals = relationship("Meal", back_populates="user", cascade="all, delete-orphan")


Index("uq_app_user_email_lower", func.lower(User.email), unique=True)


class UserSession(Base):
    """Opaque session token issued at registration"""

    __tablename__ = "user_session"

    token = Column(Text, primary_key=True)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="sessions")
