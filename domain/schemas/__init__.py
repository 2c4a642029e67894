"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.user_schemas import (
    UserCreate,
    UserResponse,
    RegisterResponse,
)
from domain.schemas.meal_schemas import (
    MealCreate,
    MealUpdate,
    MealResponse,
    MealEnvelope,
    MealListResponse,
    MetricsResponse,
)

__all__ = [
    # User schemas
    "UserCreate",
    "UserResponse",
    "RegisterResponse",
    # Meal schemas
    "MealCreate",
    "MealUpdate",
    "MealResponse",
    "MealEnvelope",
    "MealListResponse",
    "MetricsResponse",
]
