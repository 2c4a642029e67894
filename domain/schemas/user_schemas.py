from pydantic import BaseModel, EmailStr, Field, StrictStr
from typing import Optional
from datetime import datetime
from uuid import UUID


class UserCreate(BaseModel):
    name: StrictStr = Field(..., min_length=1, max_length=255)
    email: EmailStr


class UserResponse(BaseModel):
    id: UUID
    name: str
    email: str
    created_at: Optional[datetime] = None


class RegisterResponse(BaseModel):
    """Body of POST /user; the session token travels in the cookie only."""

    user: UserResponse
