"""
User-related Pydantic schemas for responses.
"""
from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """User document as returned to its owner (password never included)."""

    id: str = Field(..., serialization_alias="_id")
    userID: str
    email: str
    albums: List[int] = []
    photos: List[int] = []

    model_config = ConfigDict(populate_by_name=True)


class UserCreated(BaseModel):
    """Response body for a successful registration."""

    id: str = Field(..., serialization_alias="_id")
    links: Dict[str, str]


class Token(BaseModel):
    """Schema for login response."""

    token: str


class TokenPayload(BaseModel):
    """Schema for JWT token payload."""

    sub: str  # userID
    exp: datetime
