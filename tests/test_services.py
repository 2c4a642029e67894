"""
Tests for the service layer with real database operations.

- IdentityService: registration, session issuance, conflicts
- SessionService: token resolution
- MealService: owner-scoped ledger operations
- MetricsService: metrics over the stored ledger
"""

import uuid
from datetime import datetime, timezone, timedelta

import pytest
from sqlalchemy.orm import Session

from test_fixtures import db_session, unique_email
from app.config import settings
from app.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceValidationError,
    UnauthorizedError,
)
from domain.models import Meal, User
from services import IdentityService, SessionService, MealService, MetricsService


def _register(db: Session, name: str = "Sarah Martinez") -> User:
    user, _ = IdentityService.register(db, name, unique_email(name.split()[0].lower()))
    return user


def _log(db: Session, user: User, name: str = "Dinner", is_on_diet: bool = True, date=None) -> Meal:
    return MealService.create_meal(
        db,
        user.user_id,
        name,
        "It's a delicious dish",
        is_on_diet,
        date or datetime(2024, 7, 2, 8, 0),
    )


# =============================================================================
# IDENTITY / SESSION
# =============================================================================


def test_register_issues_resolvable_session(db_session: Session):
    user, session = IdentityService.register(
        db_session, "Sarah Martinez", unique_email("sarah")
    )

    assert user.user_id is not None
    assert session.user_id == user.user_id
    assert len(session.token) >= 32
    assert SessionService.resolve(db_session, session.token).user_id == user.user_id


def test_register_stores_name_and_email_as_given(db_session: Session):
    user, _ = IdentityService.register(db_session, "Emma Johnson ", "Emma.Johnson@Example.COM")

    assert user.email == "Emma.Johnson@Example.COM"
    assert user.name == "Emma Johnson "
    assert (
        db_session.query(User).filter(User.email == "Emma.Johnson@Example.COM").count()
        == 1
    )


def test_register_duplicate_email_conflicts_ignoring_case(db_session: Session):
    IdentityService.register(db_session, "Emma Johnson", "Emma.Johnson@Example.com")

    with pytest.raises(ConflictError):
        IdentityService.register(db_session, "Emma Johnson", "emma.johnson@example.COM")

    assert db_session.query(User).count() == 1


def test_tokens_are_unique_per_registration(db_session: Session):
    _, first = IdentityService.register(db_session, "Sarah Martinez", unique_email("a"))
    _, second = IdentityService.register(db_session, "Sarah Martinez", unique_email("b"))

    assert first.token != second.token


def test_register_duplicate_email_conflicts_regardless_of_name(db_session: Session):
    email = unique_email("dup")
    IdentityService.register(db_session, "Sarah Martinez", email)

    with pytest.raises(ConflictError) as exc_info:
        IdentityService.register(db_session, "Michael Chen", email)

    assert exc_info.value.message == "User already exists"
    assert db_session.query(User).filter(User.email == email).count() == 1


@pytest.mark.parametrize(
    "name,email",
    [(123, "a@example.com"), ("", "a@example.com"), ("Sarah", 456), ("Sarah", "no-at-sign")],
)
def test_register_rejects_malformed_input(db_session: Session, name, email):
    with pytest.raises(ServiceValidationError):
        IdentityService.register(db_session, name, email)

    assert db_session.query(User).count() == 0


@pytest.mark.parametrize("token", [None, "", "   ", "unknown-token"])
def test_resolve_rejects_bad_tokens(db_session: Session, token):
    _register(db_session)

    with pytest.raises(UnauthorizedError):
        SessionService.resolve(db_session, token)


def test_resolve_rejects_oversized_token(db_session: Session):
    with pytest.raises(UnauthorizedError):
        SessionService.resolve(db_session, "x" * (settings.session_token_max_length + 1))


# =============================================================================
# MEAL LEDGER
# =============================================================================


def test_create_and_get_meal(db_session: Session):
    user = _register(db_session)
    meal = _log(db_session, user, name="Dinner", is_on_diet=False)

    fetched = MealService.get_meal(db_session, user.user_id, meal.meal_id)

    assert fetched.meal_id == meal.meal_id
    assert fetched.user_id == user.user_id
    assert fetched.is_on_diet is False
    assert fetched.position == 1


def test_get_meal_accepts_string_ids(db_session: Session):
    user = _register(db_session)
    meal = _log(db_session, user)

    assert MealService.get_meal(db_session, user.user_id, str(meal.meal_id)).meal_id == meal.meal_id


@pytest.mark.parametrize(
    "field,value",
    [("name", 42), ("name", "  "), ("description", None), ("is_on_diet", "yes"), ("date", "2024-07-02")],
)
def test_create_meal_rejects_wrong_shapes(db_session: Session, field, value):
    user = _register(db_session)
    fields = {
        "name": "Dinner",
        "description": "It's a delicious dish",
        "is_on_diet": True,
        "date": datetime(2024, 7, 2, 8, 0),
    }
    fields[field] = value

    with pytest.raises(ServiceValidationError) as exc_info:
        MealService.create_meal(db_session, user.user_id, **fields)

    assert field in exc_info.value.details
    assert db_session.query(Meal).count() == 0


def test_create_meal_normalizes_aware_dates(db_session: Session):
    user = _register(db_session)
    aware = datetime(2024, 7, 2, 10, 0, tzinfo=timezone(timedelta(hours=2)))

    meal = _log(db_session, user, date=aware)

    assert meal.date == datetime(2024, 7, 2, 8, 0)


def test_list_meals_in_recording_order(db_session: Session):
    user = _register(db_session)
    _log(db_session, user, name="Late", date=datetime(2024, 7, 3, 21, 0))
    _log(db_session, user, name="Early", date=datetime(2024, 7, 1, 7, 0))

    names = [m.name for m in MealService.list_meals(db_session, user.user_id)]

    assert names == ["Late", "Early"]


def test_cross_user_access_looks_like_missing(db_session: Session):
    owner = _register(db_session, "Sarah Martinez")
    intruder = _register(db_session, "Michael Chen")
    meal = _log(db_session, owner)

    operations = [
        lambda meal_id: MealService.get_meal(db_session, intruder.user_id, meal_id),
        lambda meal_id: MealService.update_meal(
            db_session, intruder.user_id, meal_id, "Stolen", "", False, datetime(2024, 7, 2)
        ),
        lambda meal_id: MealService.delete_meal(db_session, intruder.user_id, meal_id),
    ]
    for operation in operations:
        with pytest.raises(NotFoundError):
            operation(meal.meal_id)
        with pytest.raises(NotFoundError):
            operation(uuid.uuid4())

    assert MealService.list_meals(db_session, intruder.user_id) == []
    assert MealService.get_meal(db_session, owner.user_id, meal.meal_id).name == "Dinner"


def test_malformed_meal_id_is_not_found(db_session: Session):
    user = _register(db_session)

    with pytest.raises(NotFoundError):
        MealService.get_meal(db_session, user.user_id, "not-a-uuid")
    with pytest.raises(NotFoundError):
        MealService.delete_meal(db_session, user.user_id, "not-a-uuid")


def test_update_meal_replaces_fields_and_keeps_owner(db_session: Session):
    user = _register(db_session)
    meal = _log(db_session, user, name="Dinner", is_on_diet=True)

    result = MealService.update_meal(
        db_session,
        user.user_id,
        meal.meal_id,
        "Lunch",
        "It's a delicious food",
        False,
        datetime(2024, 7, 3, 12, 30),
    )

    assert result is None
    updated = MealService.get_meal(db_session, user.user_id, meal.meal_id)
    assert (updated.name, updated.description, updated.is_on_diet, updated.date) == (
        "Lunch",
        "It's a delicious food",
        False,
        datetime(2024, 7, 3, 12, 30),
    )
    assert updated.user_id == user.user_id
    assert updated.position == 1


def test_update_meal_rejects_wrong_shapes(db_session: Session):
    user = _register(db_session)
    meal = _log(db_session, user)

    with pytest.raises(ServiceValidationError):
        MealService.update_meal(
            db_session, user.user_id, meal.meal_id, "Lunch", "", "no", datetime(2024, 7, 3)
        )


def test_delete_meal_twice(db_session: Session):
    user = _register(db_session)
    meal = _log(db_session, user)
    meal_id = meal.meal_id

    MealService.delete_meal(db_session, user.user_id, meal_id)

    with pytest.raises(NotFoundError):
        MealService.delete_meal(db_session, user.user_id, meal_id)


# =============================================================================
# METRICS
# =============================================================================


def test_metrics_over_stored_ledger(db_session: Session):
    user = _register(db_session)
    for flag in (True, True, False, False):
        _log(db_session, user, is_on_diet=flag)

    metrics = MetricsService.get_metrics(db_session, user.user_id)

    assert metrics.total_meals == 4
    assert metrics.total_meals_on_diet == 2
    assert metrics.total_meals_off_diet == 2
    assert metrics.best_on_diet_sequence == 2


def test_metrics_for_user_without_meals(db_session: Session):
    user = _register(db_session)

    metrics = MetricsService.get_metrics(db_session, user.user_id)

    assert (metrics.total_meals, metrics.best_on_diet_sequence) == (0, 0)
