"""Pydantic schemas for the captive-portal guest endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from captiveportal.domain.services.phone_number import (
    is_valid_phone_number,
    normalize_phone_number,
)


def _validate_phone(value: str) -> str:
    normalized = normalize_phone_number(value)
    if not is_valid_phone_number(normalized):
        raise PydanticCustomError(
            "invalid_phone_number",
            "Please provide a valid Nigerian phone number (e.g., 08012345678)",
        )
    return normalized


class RegisterRequest(BaseModel):
    """Request body for guest registration."""

    first_name: str = Field(
        ..., min_length=2, max_length=100, description="Given name"
    )
    last_name: str = Field(
        ..., min_length=2, max_length=100, description="Family name"
    )
    email: EmailStr = Field(..., description="Guest's email address")
    phone_number: str = Field(..., description="Nigerian mobile number, e.g. 08012345678")
    company: str = Field(..., min_length=2, max_length=200, description="Company name")

    @field_validator("first_name", "last_name", "company", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, v: str) -> str:
        return _validate_phone(v)


class LoginRequest(BaseModel):
    """Request body for guest login."""

    email: EmailStr = Field(..., description="Guest's email address")
    phone_number: str = Field(..., description="Phone number used at registration")

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, v: str) -> str:
        return _validate_phone(v)


class UserResponse(BaseModel):
    """Guest identity returned to the portal."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="Guest's email address")
    phone_number: str = Field(..., description="Normalized phone number")
    first_name: str
    last_name: str
    company: str | None = None
    registration_date: datetime | None = None
    last_login: datetime | None = None

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Response for successful registration or login."""

    success: bool = Field(True)
    message: str = Field(..., description="Human-readable status message")
    token: str = Field(..., description="JWT bearer token")
    user: UserResponse = Field(..., description="Guest identity")


class ProfileResponse(BaseModel):
    success: bool = Field(True)
    user: UserResponse
