"""Schemas shared by every API response."""

from pydantic import BaseModel, Field


class ValidationErrorDetail(BaseModel):
    """Detail for a single validation error."""

    field: str = Field(..., description="Field name that failed validation")
    message: str = Field(..., description="Human-readable error message")
    code: str | None = Field(None, description="Machine-readable error code")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Human-readable error message")
    errors: list[ValidationErrorDetail] | None = Field(
        None, description="Field-level validation errors"
    )


class MessageResponse(BaseModel):
    """Acknowledgement without a payload."""

    success: bool = Field(True)
    message: str = Field(..., description="Human-readable status message")


class HealthResponse(BaseModel):
    success: bool = Field(True)
    message: str
    timestamp: str
    version: str | None = None
