"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from user_service.domain.models import Account


class UserResponse(BaseModel):
    """Public view of an account (never includes the password hash)."""

    id: str
    name: str
    email: str
    phone_number: str
    created_at: datetime

    @classmethod
    def from_domain(cls, account: Account) -> "UserResponse":
        return cls(
            id=account.id,
            name=account.name,
            email=account.email,
            phone_number=account.phone_number,
            created_at=account.created_at,
        )


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    name: str
    email: str
    password: str
    phone_number: str


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    activation_token: str


class ActivateRequest(BaseModel):
    """Request model for account activation."""

    activation_token: str = Field(..., alias="activationToken")
    activation_code: str = Field(
        ..., alias="activationCode", description="4-digit activation code from email"
    )

    model_config = {"populate_by_name": True}


class ActivateResponse(BaseModel):
    """Response model for successful activation."""

    user: UserResponse


class LoginRequest(BaseModel):
    """Request model for password login."""

    email: str
    password: str


class LoginResponse(BaseModel):
    """Login outcome; failures carry ``error`` and null tokens."""

    user: UserResponse | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    error: str | None = None


class RefreshRequest(BaseModel):
    """Request body for exchanging a refresh token."""

    refresh_token: str


class TokenPairResponse(BaseModel):
    """Freshly issued access/refresh pair."""

    access_token: str
    refresh_token: str


class CurrentUserResponse(BaseModel):
    """Authenticated user and the tokens of the current session."""

    user: UserResponse | None = None
    access_token: str | None = None
    refresh_token: str | None = None


class LogoutResponse(BaseModel):
    """Response model for logout."""

    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
