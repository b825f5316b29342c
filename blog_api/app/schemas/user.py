"""
Pydantic models for user data.

``RegisterRequest`` and ``LoginRequest`` describe inbound payloads.
``UserPublic`` and ``UserSummary`` are the shapes in which a user is
embedded in post and comment responses.  ``UserInDB`` carries the
password hash and is only used inside the service layer; it is never
returned by an endpoint.
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator


USERNAME_MIN, USERNAME_MAX = 3, 20
PASSWORD_MIN, PASSWORD_MAX = 8, 30


class RegisterRequest(BaseModel):
    """Schema for registering a user."""

    username: str = Field(..., min_length=USERNAME_MIN, max_length=USERNAME_MAX, examples=["alice"])
    email: str = Field(..., min_length=1, examples=["alice@example.com"])
    password: str = Field(..., min_length=PASSWORD_MIN, max_length=PASSWORD_MAX, examples=["correct-horse"])


class LoginRequest(BaseModel):
    """Schema for logging in by username or e‑mail.

    When both identifiers are sent the username wins.
    """

    username: Optional[str] = Field(None, min_length=USERNAME_MIN, max_length=USERNAME_MAX)
    email: Optional[str] = Field(None, min_length=1)
    password: str = Field(..., min_length=PASSWORD_MIN, max_length=PASSWORD_MAX)

    @model_validator(mode="after")
    def require_identifier(self) -> "LoginRequest":
        if self.username is None and self.email is None:
            raise ValueError("Either username or email is required")
        return self


class UserSummary(BaseModel):
    id: str
    username: str


class UserPublic(UserSummary):
    email: str


class UserInDB(UserPublic):
    """Stored user including the password hash."""

    password_hash: str
    created_at: str
    updated_at: str


class RegisterResponse(BaseModel):
    message: str
    userId: str


class LoginResponse(BaseModel):
    message: str
    token: str
