"""Schemas for registration, login and profile management."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator

from fraud_review.domain.models.transaction import UserRole


class RegisterRequest(BaseModel):
    """Schema for creating a user account."""

    email: EmailStr = Field(..., description="Login email, must be unique")
    password: str = Field(..., min_length=6, description="Password, at least 6 characters")
    username: str = Field(..., min_length=3, max_length=100)
    country: str = Field(..., min_length=2, max_length=100, description="Home country")
    full_name: str | None = Field(None, max_length=255)
    phone_number: str | None = Field(None, max_length=50)


class RegisterResponse(BaseModel):
    message: str
    user_id: UUID


class LoginRequest(BaseModel):
    """Schema for logging in.

    When role is given, the account must hold that role.
    """

    email: EmailStr
    password: str = Field(..., min_length=1)
    role: UserRole | None = None


class UserSummary(BaseModel):
    id: UUID
    email: str
    username: str
    role: UserRole


class LoginResponse(BaseModel):
    message: str
    access_token: str
    token_type: str = "bearer"
    user: UserSummary


class UserResponse(BaseModel):
    """A user account, without the password hash."""

    id: UUID
    email: str
    username: str
    full_name: str | None = None
    country: str
    phone_number: str | None = None
    role: UserRole
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileUpdateRequest(BaseModel):
    """Schema for updating the caller's own profile.

    A password change needs both current_password and new_password.
    """

    username: str | None = Field(None, min_length=3, max_length=100)
    full_name: str | None = Field(None, max_length=255)
    country: str | None = Field(None, min_length=2, max_length=100)
    phone_number: str | None = Field(None, max_length=50)
    current_password: str | None = None
    new_password: str | None = Field(None, min_length=6)

    @model_validator(mode="after")
    def validate_password_change(self) -> "ProfileUpdateRequest":
        if self.new_password and not self.current_password:
            raise ValueError("current_password is required to set a new password")
        return self


class MessageResponse(BaseModel):
    message: str
