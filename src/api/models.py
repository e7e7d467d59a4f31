"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Field-level rules live here; the domain receives already-valid input.
"""

import re
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

_PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter."),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter."),
    (re.compile(r"\d"), "Password must contain at least one number."),
)


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    username: str = Field(..., min_length=3, max_length=50, description="Unique username")
    email: EmailStr
    password: str = Field(
        ...,
        min_length=8,
        description="At least 8 characters with an uppercase letter, a lowercase letter and a digit",
    )

    @field_validator("password")
    @classmethod
    def _password_complexity(cls, value: str) -> str:
        for pattern, message in _PASSWORD_RULES:
            if not pattern.search(value):
                raise ValueError(message)
        return value


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    message: str
    id: UUID
    username: str
    email: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
