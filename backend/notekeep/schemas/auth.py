"""
NoteKeep Backend — Account & Identity Schemas
===============================================

What:  Pydantic models for registration, login, and the resolved Identity.

Identity is the value the authenticator hands to every note operation.
It is immutable so that nothing downstream can swap the owner mid-request.
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

# Deliberately loose: one "@", no whitespace, a dot in the domain
_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class Identity(BaseModel):
    """The authenticated caller, resolved from a bearer token."""
    user_id: uuid.UUID
    email: str
    display_name: str

    model_config = {"frozen": True}


class RegisterRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255, pattern=_EMAIL_PATTERN)
    password: str = Field(min_length=8, max_length=72)
    display_name: str = Field(min_length=1, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        # Before the pattern check, so padded input is accepted
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("display_name")
    @classmethod
    def strip_display_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Display name must not be blank")
        return stripped


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=72)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")


class UserResponse(BaseModel):
    id: uuid.UUID
    email: str
    display_name: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
