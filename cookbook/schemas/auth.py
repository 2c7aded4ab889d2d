"""Authentication and account schemas."""

import re

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from cookbook.schemas.common import Envelope

# At least one lowercase letter, one uppercase letter and one digit
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{6,}$")
# Letters and digits, at least one letter
DISPLAY_NAME_PATTERN = re.compile(r"^(?=.*[a-zA-Z])[a-zA-Z0-9]{3,30}$")


class UserRegister(BaseModel):
    """User registration request."""

    name: str = Field(..., min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9]+$")
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=60)
    newsletter: bool = False

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not PASSWORD_PATTERN.match(value):
            raise ValueError(
                "Password must contain a lowercase letter, an uppercase letter and a digit"
            )
        return value


class UserLogin(BaseModel):
    """User sign-in request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=60)


class UserNameUpdate(BaseModel):
    """Display name change request."""

    name: str

    @field_validator("name")
    @classmethod
    def name_format(cls, value: str) -> str:
        if not DISPLAY_NAME_PATTERN.match(value):
            raise ValueError("Name must be 3-30 letters or digits and contain a letter")
        return value


class UserResponse(BaseModel):
    """Public user information."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    avatar: str
    verified: bool


class AuthResponse(Envelope):
    """Token plus user, returned by registration, sign-in and current user."""

    message: str | None = None
    token: str
    user: UserResponse


class UserEnvelope(Envelope):
    user: UserResponse
