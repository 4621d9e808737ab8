"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from storefront.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from storefront.models.user import Role


class RegisterRequest(BaseModel):
    """New account; the role (admin or staff) is chosen by the caller."""

    email: EmailStr = Field(..., description="Unique email address")
    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Unique username"
    )
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    role: Role = Field(..., description="admin or staff")


class RegisterResponse(BaseModel):
    message: str = "User registered successfully"
    userId: int


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Email")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class UserSummary(BaseModel):
    id: int
    email: str
    role: Role


class LoginResponse(BaseModel):
    """Access token, user summary and CSRF token returned after successful login."""

    accessToken: str = Field(..., description="JWT access token")
    tokenType: str = Field(default="bearer", description="Token type")
    user: UserSummary
    csrfToken: str = Field(..., description="Echo in the X-CSRF-Token header on mutations")


class AccessTokenResponse(BaseModel):
    accessToken: str
    tokenType: str = "bearer"


class CsrfTokenResponse(BaseModel):
    csrfToken: str


class MessageResponse(BaseModel):
    message: str


class CurrentUser(BaseModel):
    """Authenticated user (id, username, email, role) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: Role
