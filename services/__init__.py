"""Services package - Business logic layer"""

from services.identity_service import IdentityService
from services.session_service import SessionService
from services.meal_service import MealService
from services.metrics_service import MetricsService, MealMetrics, best_on_diet_sequence

__all__ = [
    "IdentityService",
    "SessionService",
    "MealService",
    "MetricsService",
    "MealMetrics",
    "best_on_diet_sequence",
]
