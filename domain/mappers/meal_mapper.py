"""
Meal domain mappers.
"""

from datetime import datetime, timezone
from typing import Iterable

from domain.models import Meal
from domain.schemas.meal_schemas import MealListResponse, MealResponse, MetricsResponse
from services.metrics_service import MealMetrics


def _as_utc(value: datetime) -> datetime:
    """Dates are stored as naive UTC; mark them as such on the way out"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class MealMapper:
    """Mapper for meal ledger transformations."""

    @staticmethod
    def to_response(meal: Meal) -> MealResponse:
        return MealResponse(
            id=meal.meal_id,
            user_id=meal.user_id,
            name=meal.name,
            description=meal.description,
            is_on_diet=meal.is_on_diet,
            date=_as_utc(meal.date),
            created_at=meal.created_at,
            updated_at=meal.updated_at,
        )

    @staticmethod
    def to_list_response(meals: Iterable[Meal]) -> MealListResponse:
        """Keeps the ledger order it is given."""
        return MealListResponse(meals=[MealMapper.to_response(m) for m in meals])

    @staticmethod
    def to_metrics_response(metrics: MealMetrics) -> MetricsResponse:
        return MetricsResponse(
            total_meals=metrics.total_meals,
            total_meals_on_diet=metrics.total_meals_on_diet,
            total_meals_off_diet=metrics.total_meals_off_diet,
            best_on_diet_sequence=metrics.best_on_diet_sequence,
        )
