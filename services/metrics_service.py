"""
Metrics Service - diet adherence statistics over a user's meal ledger.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence
from uuid import UUID
from sqlalchemy.orm import Session

from services.meal_service import MealService

logger = logging.getLogger("dailydiet.metrics")


@dataclass(frozen=True)
class MealMetrics:
    total_meals: int = 0
    total_meals_on_diet: int = 0
    total_meals_off_diet: int = 0
    best_on_diet_sequence: int = 0


def best_on_diet_sequence(flags: Iterable[bool]) -> int:
    """
    Length of the longest run of consecutive on-diet meals.

    ``flags`` must be in recording order. An off-diet meal resets the
    running count.

    Example:
        >>> best_on_diet_sequence([True, True, False, True])
        2
    """
    best = 0
    current = 0
    for on_diet in flags:
        if on_diet:
            current += 1
            if current > best:
                best = current
        else:
            current = 0
    return best


class MetricsService:
    @staticmethod
    def summarize(flags: Sequence[bool]) -> MealMetrics:
        """Compute all metrics from diet flags in recording order"""
        on_diet = sum(1 for flag in flags if flag)
        return MealMetrics(
            total_meals=len(flags),
            total_meals_on_diet=on_diet,
            total_meals_off_diet=len(flags) - on_diet,
            best_on_diet_sequence=best_on_diet_sequence(flags),
        )

    @staticmethod
    def get_metrics(db: Session, user_id: UUID) -> MealMetrics:
        """Metrics over the user's ledger; an empty ledger gives all zeros"""
        meals = MealService.list_meals(db, user_id)
        metrics = MetricsService.summarize([meal.is_on_diet for meal in meals])
        logger.info(
            f"metrics_computed user_id={user_id} total={metrics.total_meals} "
            f"best_sequence={metrics.best_on_diet_sequence}"
        )
        return metrics
