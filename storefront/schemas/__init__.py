"""Pydantic request/response schemas."""

from storefront.schemas.auth import (
    AccessTokenResponse,
    CsrfTokenResponse,
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    UserSummary,
)
from storefront.schemas.entities import (
    EntityListResponse,
    EntityResponse,
    HealthResponse,
    PageMeta,
)

__all__ = [
    "AccessTokenResponse",
    "CsrfTokenResponse",
    "CurrentUser",
    "EntityListResponse",
    "EntityResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PageMeta",
    "RegisterRequest",
    "RegisterResponse",
    "UserSummary",
]
