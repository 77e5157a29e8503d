from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from app.core.policy import Role


def _check_password_strength(v: str) -> str:
    if len(v) < 8:
        raise ValueError('Password must be at least 8 characters long')
    if not any(c.isupper() for c in v):
        raise ValueError('Password must contain at least one uppercase letter')
    if not any(c.islower() for c in v):
        raise ValueError('Password must contain at least one lowercase letter')
    if not any(c.isdigit() for c in v):
        raise ValueError('Password must contain at least one digit')
    return v


# Request Schemas
class SignupRequest(BaseModel):
    """
    Signup request schema.

    ``role`` and ``invite`` mirror the sign-in link (``?role=asha&invite=...``);
    without them the account starts as citizen.
    """

    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)
    role: Role = Role.CITIZEN
    invite: Optional[str] = None

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_strength(v)


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr
    password: str


# Response Schemas
class UserResponse(BaseModel):
    """User response schema."""

    id: str
    email: EmailStr
    name: str
    role: Role
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """Login response schema."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class SignupResponse(LoginResponse):
    """Signup response schema."""
