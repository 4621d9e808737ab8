"""Request dependencies: service wiring, session guard, role gate and CSRF guard."""

import logging
from collections.abc import Callable
from functools import lru_cache
from typing import Annotated

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from storefront.core.config import get_settings
from storefront.core.csrf import CSRF_COOKIE_NAME, CSRF_HEADER_NAME, SAFE_METHODS, CsrfProtect
from storefront.core.database import get_db
from storefront.core.errors import AuthenticationError, AuthorizationError, ForbiddenError
from storefront.core.security import TokenService
from storefront.models import Role
from storefront.schemas.auth import CurrentUser
from storefront.services.auth import AuthService
from storefront.services.credentials import CredentialStore

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


@lru_cache
def get_token_service() -> TokenService:
    """TokenService built once from settings; secrets are passed in, not read globally."""
    return TokenService.from_settings(get_settings())


@lru_cache
def get_csrf_protect() -> CsrfProtect:
    s = get_settings()
    return CsrfProtect(s.csrf_secret, max_age_seconds=s.CSRF_MAX_AGE_SECONDS)


def get_credential_store(db: Annotated[Session, Depends(get_db)]) -> CredentialStore:
    return CredentialStore(db)


def get_auth_service(
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    return AuthService(store, tokens, bcrypt_rounds=get_settings().BCRYPT_ROUNDS)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    try:
        payload = tokens.decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise AuthenticationError("Invalid or expired token") from None
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError("Invalid token payload") from None
    user = store.get_user_by_id(user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return CurrentUser(
        id=user.account_id,
        username=user.username,
        email=user.email,
        role=user.role,
    )


def require_roles(*roles: Role) -> Callable[..., CurrentUser]:
    """
    Build a dependency that admits only the given roles.

    The allowed set is fixed when the route is registered; at request time it is a
    pure membership test on the identity attached by get_current_user.
    """
    allowed = frozenset(roles)
    if not allowed:
        raise ValueError("require_roles needs at least one role")
    required = ", ".join(sorted(r.value for r in allowed))

    def dep(
        current_user: Annotated[CurrentUser | None, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user is None:
            raise AuthenticationError("Unauthorized")
        if current_user.role not in allowed:
            logger.warning(
                "Access denied for role %s",
                current_user.role.value,
                extra={"user_id": current_user.id, "required_roles": required},
            )
            raise AuthorizationError(f"Access denied. Required roles: {required}")
        return current_user

    return dep


def verify_csrf(
    request: Request,
    csrf: Annotated[CsrfProtect, Depends(get_csrf_protect)],
) -> None:
    """Dependency: double-submit check for state-changing requests. Raises 403 on absence or mismatch."""
    if request.method in SAFE_METHODS:
        return
    cookie_token = request.cookies.get(CSRF_COOKIE_NAME)
    header_token = request.headers.get(CSRF_HEADER_NAME)
    if not csrf.validate(cookie_token, header_token):
        logger.warning(
            "CSRF check failed",
            extra={"method": request.method, "path": request.url.path},
        )
        raise ForbiddenError("Invalid or missing CSRF token")
