"""Meal ledger and metrics routes.

Every route depends on ``get_current_user``; the resolved user's id is
passed explicitly into the service layer.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, get_current_user
from domain.models import User
from domain.schemas.meal_schemas import (
    MealCreate,
    MealUpdate,
    MealEnvelope,
    MealListResponse,
    MetricsResponse,
)
from domain.mappers import MealMapper
from services.meal_service import MealService
from services.metrics_service import MetricsService

router = APIRouter(prefix="/meal", tags=["Meals"])
logger = logging.getLogger("dailydiet.api.meals")


@router.post("", response_model=MealEnvelope, status_code=status.HTTP_201_CREATED)
def create_meal(
    payload: MealCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Log a meal for the current user"""
    meal = MealService.create_meal(
        db,
        user.user_id,
        payload.name,
        payload.description,
        payload.is_on_diet,
        payload.date,
    )
    return MealEnvelope(meal=MealMapper.to_response(meal))


@router.get("", response_model=MealListResponse)
def list_meals(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """All meals of the current user in the order they were logged"""
    meals = MealService.list_meals(db, user.user_id)
    logger.info("Found %d meals for user %s", len(meals), user.user_id)
    return MealMapper.to_list_response(meals)


# Must be declared before "/{meal_id}" so "metrics" is not taken for an id
@router.get("/metrics", response_model=MetricsResponse)
def get_metrics(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Totals and the best on-diet streak for the current user"""
    metrics = MetricsService.get_metrics(db, user.user_id)
    logger.info(f"Retrieved meal metrics for user {user.user_id}")
    return MealMapper.to_metrics_response(metrics)


@router.get("/{meal_id}", response_model=MealEnvelope)
def get_meal(
    meal_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Fetch one meal; 404 when it is missing or owned by someone else"""
    meal = MealService.get_meal(db, user.user_id, meal_id)
    return MealEnvelope(meal=MealMapper.to_response(meal))


@router.put(
    "/{meal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def update_meal(
    meal_id: str,
    payload: MealUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Replace name, description, diet flag and date of an owned meal"""
    MealService.update_meal(
        db,
        user.user_id,
        meal_id,
        payload.name,
        payload.description,
        payload.is_on_diet,
        payload.date,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{meal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_meal(
    meal_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete an owned meal"""
    MealService.delete_meal(db, user.user_id, meal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
