"""
User domain mappers.
Handles transformation between ORM models and DTOs for user-related entities.
"""

from domain.models import User
from domain.schemas.user_schemas import UserResponse


class UserMapper:
    """Mapper for user-related transformations."""

    @staticmethod
    def to_response(user: User) -> UserResponse:
        """
        Convert User ORM model to UserResponse DTO.

        Session tokens are deliberately absent from the DTO; they are only
        ever emitted as a cookie.
        """
        return UserResponse(
            id=user.user_id,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
        )
