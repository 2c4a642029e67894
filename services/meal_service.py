"""
Meal Service - the per-user meal ledger.

Every operation takes the id of an already resolved user and touches only
meals owned by that user.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Union
from uuid import UUID
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, ServiceValidationError
from domain.models import Meal
from repositories import MealRepository

logger = logging.getLogger("dailydiet.meals")


class MealService:
    @staticmethod
    def _parse_meal_id(meal_id: Union[UUID, str]) -> UUID:
        """Ids that cannot be UUIDs cannot exist either"""
        if isinstance(meal_id, UUID):
            return meal_id
        try:
            return UUID(str(meal_id))
        except ValueError:
            raise NotFoundError(f"Meal {meal_id} not found")

    @staticmethod
    def _normalize_date(value: datetime) -> datetime:
        """Store every date as naive UTC"""
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @staticmethod
    def validate_fields(
        name: Any, description: Any, is_on_diet: Any, date: Any
    ) -> None:
        """
        Check the shape of the mutable meal fields.

        Raises:
            ServiceValidationError: with a field -> problem mapping in ``details``
        """
        errors: Dict[str, str] = {}
        if not isinstance(name, str) or not name.strip():
            errors["name"] = "must be a non-empty string"
        if not isinstance(description, str):
            errors["description"] = "must be a string"
        if not isinstance(is_on_diet, bool):
            errors["is_on_diet"] = "must be a boolean"
        if not isinstance(date, datetime):
            errors["date"] = "must be a datetime"
        if errors:
            raise ServiceValidationError(
                "Invalid meal data", details=errors, code="INVALID_MEAL"
            )

    @staticmethod
    def _get_owned_or_404(repo: MealRepository, user_id: UUID, meal_id) -> Meal:
        parsed_id = MealService._parse_meal_id(meal_id)
        meal = repo.get_owned(user_id, parsed_id)
        if meal is None:
            logger.info(f"meal_not_found user_id={user_id} meal_id={meal_id}")
            raise NotFoundError(f"Meal {meal_id} not found")
        return meal

    @staticmethod
    def create_meal(
        db: Session,
        user_id: UUID,
        name: str,
        description: str,
        is_on_diet: bool,
        date: datetime,
    ) -> Meal:
        """Append a meal to the user's ledger"""
        MealService.validate_fields(name, description, is_on_diet, date)
        repo = MealRepository(db)
        meal = Meal(
            user_id=user_id,
            name=name,
            description=description,
            is_on_diet=is_on_diet,
            date=MealService._normalize_date(date),
            position=repo.next_position(user_id),
        )
        meal = repo.create(meal)
        logger.info(
            f"meal_created user_id={user_id} meal_id={meal.meal_id} "
            f"position={meal.position} on_diet={meal.is_on_diet}"
        )
        return meal

    @staticmethod
    def list_meals(db: Session, user_id: UUID) -> List[Meal]:
        """All meals of the user, in the order they were recorded"""
        meals = MealRepository(db).list_by_user(user_id)
        logger.debug(f"meals_listed user_id={user_id} count={len(meals)}")
        return meals

    @staticmethod
    def get_meal(db: Session, user_id: UUID, meal_id: Union[UUID, str]) -> Meal:
        return MealService._get_owned_or_404(MealRepository(db), user_id, meal_id)

    @staticmethod
    def update_meal(
        db: Session,
        user_id: UUID,
        meal_id: Union[UUID, str],
        name: str,
        description: str,
        is_on_diet: bool,
        date: datetime,
    ) -> None:
        """Replace every mutable field of an owned meal. Ownership never changes."""
        repo = MealRepository(db)
        meal = MealService._get_owned_or_404(repo, user_id, meal_id)
        MealService.validate_fields(name, description, is_on_diet, date)

        meal.name = name
        meal.description = description
        meal.is_on_diet = is_on_diet
        meal.date = MealService._normalize_date(date)
        repo.update(meal)
        logger.info(f"meal_updated user_id={user_id} meal_id={meal.meal_id}")

    @staticmethod
    def delete_meal(db: Session, user_id: UUID, meal_id: Union[UUID, str]) -> None:
        """Remove an owned meal permanently. Deleting twice raises NotFoundError."""
        parsed_id = MealService._parse_meal_id(meal_id)
        removed = MealRepository(db).delete_owned(user_id, parsed_id)
        if not removed:
            logger.info(f"meal_not_found user_id={user_id} meal_id={meal_id}")
            raise NotFoundError(f"Meal {meal_id} not found")
        logger.info(f"meal_deleted user_id={user_id} meal_id={parsed_id}")
