"""Auth endpoints: register, login, refresh, logout, CSRF token issue and current identity."""

from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, Response, status

from storefront.api.v1.deps import (
    get_auth_service,
    get_csrf_protect,
    get_current_user,
)
from storefront.core.config import get_settings
from storefront.core.csrf import CSRF_COOKIE_NAME, CsrfProtect
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
from storefront.services.auth import AuthService

router = APIRouter()

REFRESH_COOKIE_NAME = "refreshToken"


def _set_csrf_cookie(response: Response, token: str) -> None:
    s = get_settings()
    # Readable by page scripts so they can echo it in the X-CSRF-Token header.
    response.set_cookie(
        CSRF_COOKIE_NAME,
        token,
        max_age=s.CSRF_MAX_AGE_SECONDS,
        httponly=False,
        secure=s.cookie_secure,
        samesite="strict",
        path="/",
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> RegisterResponse:
    """
    Register an account with the caller-chosen role (admin or staff).

    Returns 409 when the email or username is taken.
    """
    user_id = auth.register(
        email=body.email,
        username=body.username,
        password=body.password,
        role=body.role,
    )
    return RegisterResponse(userId=user_id)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    csrf: Annotated[CsrfProtect, Depends(get_csrf_protect)],
) -> LoginResponse:
    """
    Authenticate with email and password.

    Returns a short-lived access token (send as: Authorization: Bearer <accessToken>)
    and a CSRF token; the refresh token is set as an HttpOnly cookie.
    """
    s = get_settings()
    result = auth.login(body.email, body.password)
    response.set_cookie(
        REFRESH_COOKIE_NAME,
        result.refresh_token,
        max_age=int(auth.tokens.refresh_ttl.total_seconds()),
        httponly=True,
        secure=s.cookie_secure,
        samesite="strict",
        path="/",
    )
    csrf_token = csrf.issue()
    _set_csrf_cookie(response, csrf_token)
    return LoginResponse(
        accessToken=result.access_token,
        user=UserSummary(
            id=result.user.account_id,
            email=result.user.email,
            role=result.user.role,
        ),
        csrfToken=csrf_token,
    )


@router.post("/refresh", response_model=AccessTokenResponse)
def refresh(
    auth: Annotated[AuthService, Depends(get_auth_service)],
    refresh_token: Annotated[str | None, Cookie(alias=REFRESH_COOKIE_NAME)] = None,
) -> AccessTokenResponse:
    """Exchange the refresh-token cookie for a new access token."""
    access_token, _user = auth.refresh(refresh_token)
    return AccessTokenResponse(accessToken=access_token)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    refresh_token: Annotated[str | None, Cookie(alias=REFRESH_COOKIE_NAME)] = None,
) -> MessageResponse:
    """Revoke the refresh token and clear the auth cookies."""
    auth.logout(refresh_token)
    s = get_settings()
    response.delete_cookie(
        REFRESH_COOKIE_NAME, path="/", secure=s.cookie_secure, httponly=True, samesite="strict"
    )
    response.delete_cookie(CSRF_COOKIE_NAME, path="/", secure=s.cookie_secure, samesite="strict")
    return MessageResponse(message="Logged out successfully")


@router.get("/csrf-token", response_model=CsrfTokenResponse)
def get_csrf_token(
    response: Response,
    csrf: Annotated[CsrfProtect, Depends(get_csrf_protect)],
) -> CsrfTokenResponse:
    """Issue a CSRF token for clients (including anonymous ones) that need to send mutations."""
    token = csrf.issue()
    _set_csrf_cookie(response, token)
    return CsrfTokenResponse(csrfToken=token)


@router.get("/me", response_model=CurrentUser)
def me(current_user: Annotated[CurrentUser, Depends(get_current_user)]) -> CurrentUser:
    """Return the identity attached by the session guard."""
    return current_user
