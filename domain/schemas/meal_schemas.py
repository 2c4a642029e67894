from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime
from uuid import UUID


class MealCreate(BaseModel):
    """Payload for logging a meal. Accepts ``isOnDiet`` or ``is_on_diet``."""

    name: StrictStr = Field(..., min_length=1, max_length=255)
    description: StrictStr = Field(..., max_length=2000)
    is_on_diet: StrictBool = Field(..., alias="isOnDiet")
    date: datetime = Field(..., description="When the meal was eaten (ISO 8601)")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("date", mode="before")
    @classmethod
    def reject_numeric_date(cls, v):
        # pydantic would otherwise read numbers as unix timestamps
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            raise ValueError("date must be an ISO 8601 string")
        return v


class MealUpdate(MealCreate):
    """Full replacement of a meal's mutable fields"""


class MealResponse(BaseModel):
    id: UUID
    user_id: UUID
    name: str
    description: str
    is_on_diet: bool
    date: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MealEnvelope(BaseModel):
    meal: MealResponse


class MealListResponse(BaseModel):
    meals: List[MealResponse]


class MetricsResponse(BaseModel):
    """Adherence metrics, serialized with camelCase keys"""

    total_meals: int = Field(..., ge=0)
    total_meals_on_diet: int = Field(..., ge=0)
    total_meals_off_diet: int = Field(..., ge=0)
    best_on_diet_sequence: int = Field(..., ge=0)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
