"""Authentication flows: registration, login, access-token refresh and logout."""

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache

import jwt
from sqlalchemy.exc import IntegrityError

from storefront.core.errors import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from storefront.core.security import BCRYPT_ROUNDS, TokenService, hash_password, verify_password
from storefront.models import Role, User
from storefront.services.credentials import CredentialStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
DUPLICATE_ACCOUNT = "Email or username already exists"
REFRESH_TOKEN_REQUIRED = "Refresh token is required"
INVALID_REFRESH_TOKEN = "Invalid refresh token"
EXPIRED_REFRESH_TOKEN = "Refresh token expired"


@lru_cache
def _dummy_hash(rounds: int) -> str:
    """Hash checked for unknown emails so both login failures cost one bcrypt verify."""
    return hash_password("storefront-unknown-account", rounds=rounds)


@dataclass(frozen=True)
class LoginResult:
    access_token: str
    refresh_token: str
    refresh_expires_at: datetime
    user: User


class AuthService:
    """Auth flows over a CredentialStore; tokens are minted by the injected TokenService."""

    def __init__(
        self,
        store: CredentialStore,
        tokens: TokenService,
        *,
        bcrypt_rounds: int = BCRYPT_ROUNDS,
    ) -> None:
        self.store = store
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds

    def register(self, *, email: str, username: str, password: str, role: Role) -> int:
        """
        Create a user and return its id.

        The lookup is only a fast path for a friendly error; the unique constraints
        decide, so a concurrent duplicate insert still ends in ConflictError.
        """
        if self.store.find_user_by_email_or_username(email, username) is not None:
            logger.warning(
                "Registration rejected: email or username exists",
                extra={"email": email, "username": username},
            )
            raise ConflictError(DUPLICATE_ACCOUNT)
        try:
            user = self.store.create_user(
                email=email,
                username=username,
                password_hash=hash_password(password, rounds=self.bcrypt_rounds),
                role=role,
            )
        except IntegrityError as e:
            logger.warning(
                "Registration lost a uniqueness race",
                extra={"email": email, "username": username},
            )
            raise ConflictError(DUPLICATE_ACCOUNT) from e
        logger.info("User registered", extra={"user_id": user.account_id, "role": role.value})
        return user.account_id

    def login(self, email: str, password: str) -> LoginResult:
        """Verify credentials, mint both tokens and persist the refresh token (upsert)."""
        user = self.store.get_user_by_email(email)
        if user is None:
            verify_password(password, _dummy_hash(self.bcrypt_rounds))
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Login failed: invalid credentials", extra={"email": email})
            raise AuthenticationError(INVALID_CREDENTIALS)

        access_token = self.tokens.create_access_token(
            sub=user.account_id, email=user.email, role=Role(user.role).value
        )
        refresh_token, expires_at = self.tokens.create_refresh_token(sub=user.account_id)
        self.store.save_refresh_token(user.account_id, refresh_token, expires_at)
        logger.info("User logged in", extra={"user_id": user.account_id})
        return LoginResult(
            access_token=access_token,
            refresh_token=refresh_token,
            refresh_expires_at=expires_at,
            user=user,
        )

    def refresh(self, refresh_token: str | None) -> tuple[str, User]:
        """
        Exchange a stored refresh token for a new access token.

        The store lookup runs before signature verification, so a token removed by
        logout or overwritten by a newer login is rejected even while its JWT is valid.
        The refresh token itself is not rotated.
        """
        if not refresh_token:
            raise ValidationError(REFRESH_TOKEN_REQUIRED)

        stored = self.store.find_refresh_token(refresh_token)
        if stored is None:
            logger.warning("Refresh rejected: token not in store")
            raise ForbiddenError(INVALID_REFRESH_TOKEN)

        try:
            payload = self.tokens.decode_refresh_token(refresh_token)
        except jwt.ExpiredSignatureError:
            logger.warning("Refresh rejected: token expired", extra={"user_id": stored.user_id})
            raise ForbiddenError(EXPIRED_REFRESH_TOKEN) from None
        except jwt.PyJWTError:
            logger.warning("Refresh rejected: bad signature", extra={"user_id": stored.user_id})
            raise ForbiddenError(INVALID_REFRESH_TOKEN) from None

        try:
            user_id = int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise ForbiddenError(INVALID_REFRESH_TOKEN) from None
        if user_id != stored.user_id:
            logger.warning("Refresh rejected: subject does not own stored token")
            raise ForbiddenError(INVALID_REFRESH_TOKEN)

        user = self.store.get_user_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        access_token = self.tokens.create_access_token(
            sub=user.account_id, email=user.email, role=Role(user.role).value
        )
        logger.info("Access token refreshed", extra={"user_id": user.account_id})
        return access_token, user

    def logout(self, refresh_token: str | None) -> None:
        """Delete the stored refresh token. Deleting an unknown token is not an error."""
        if not refresh_token:
            raise ValidationError(REFRESH_TOKEN_REQUIRED)
        deleted = self.store.delete_refresh_token(refresh_token)
        logger.info("User logged out", extra={"tokens_deleted": deleted})
