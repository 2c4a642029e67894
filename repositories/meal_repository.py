"""
Meal Repository - Data access layer for the per-user meal ledger.

Every lookup by id goes through ``get_owned`` so a meal that belongs to
someone else is indistinguishable from one that does not exist.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import and_, func

from repositories.base import BaseRepository
from domain.models import Meal


class MealRepository(BaseRepository[Meal]):
    """Repository for meal data access"""

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def get_owned(self, user_id: UUID, meal_id: UUID) -> Optional[Meal]:
        """Get a meal only if it belongs to ``user_id``"""
        return (
            self.db.query(Meal)
            .filter(and_(Meal.meal_id == meal_id, Meal.user_id == user_id))
            .first()
        )

    def list_by_user(self, user_id: UUID) -> List[Meal]:
        """All meals of a user, earliest recorded first"""
        return (
            self.db.query(Meal)
            .filter(Meal.user_id == user_id)
            .order_by(Meal.position.asc())
            .all()
        )

    def next_position(self, user_id: UUID) -> int:
        """Position the next meal of ``user_id`` will take"""
        current = (
            self.db.query(func.max(Meal.position))
            .filter(Meal.user_id == user_id)
            .scalar()
        )
        return (current or 0) + 1

    def delete_owned(self, user_id: UUID, meal_id: UUID) -> int:
        """Delete a meal owned by ``user_id``; returns the number of rows removed"""
        count = (
            self.db.query(Meal)
            .filter(and_(Meal.meal_id == meal_id, Meal.user_id == user_id))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return count
