"""
Meal ledger models.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    Text,
    TIMESTAMP,
    ForeignKey,
    Uuid,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class Meal(Base):
    """A meal logged by a user, flagged as on or off diet"""

    __tablename__ = "meal"

    meal_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    is_on_diet = Column(Boolean, nullable=False)
    date = Column(DateTime, nullable=False)  # naive UTC
    # Insertion counter within the owner's ledger; listing and metrics order by it
    position = Column(Integer, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("User", back_populates="meals")

    __table_args__ = (
        UniqueConstraint("user_id", "position", name="uq_meal_user_position"),
    )
