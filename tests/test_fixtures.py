"""
Shared test fixtures and utilities for the Daily Diet test suite.

This module contains the test client, a database session fixture and the
helpers used to register users and log meals over HTTP.
"""

import uuid
from typing import Generator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.config import settings
from domain.models import SessionLocal
from main import app


# Realistic default user profiles
REALISTIC_USERS = {
    "default": {"name": "Sarah Martinez", "email_prefix": "sarah.martinez"},
    "athlete": {"name": "Michael Chen", "email_prefix": "michael.chen"},
    "casual": {"name": "Emma Johnson", "email_prefix": "emma.johnson"},
}


def unique_email(prefix: str = "test") -> str:
    """Generate unique email address using UUID to avoid conflicts"""
    return f"{prefix}-{uuid.uuid4()}@example.com"


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """A fresh client per test so no session cookie leaks between tests"""
    yield TestClient(app)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """
    Database session bound to the test database.

    Rolled back and closed after the test.
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


def register_user(
    client: TestClient,
    profile_type: str = "default",
    email: Optional[str] = None,
) -> str:
    """
    Register a user over HTTP and return its session token.

    The client's cookie jar is cleared afterwards; pass the token explicitly
    with ``auth_headers`` so tests can act as several users.
    """
    profile = REALISTIC_USERS[profile_type]
    response = client.post(
        "/user",
        json={
            "name": profile["name"],
            "email": email or unique_email(profile["email_prefix"]),
        },
    )
    assert response.status_code == 201, response.text
    token = response.cookies.get(settings.session_cookie_name)
    assert token
    client.cookies.clear()
    return token


def auth_headers(token: str) -> dict:
    return {"Cookie": f"{settings.session_cookie_name}={token}"}


def meal_payload(
    name: str = "Dinner",
    description: str = "It's a delicious dish",
    is_on_diet: bool = True,
    date: str = "2024-07-02T08:00:00",
) -> dict:
    return {
        "name": name,
        "description": description,
        "isOnDiet": is_on_diet,
        "date": date,
    }


def create_meal(client: TestClient, token: str, **overrides) -> dict:
    """Log a meal over HTTP and return the created meal body"""
    response = client.post("/meal", json=meal_payload(**overrides), headers=auth_headers(token))
    assert response.status_code == 201, response.text
    return response.json()["meal"]
