"""Password hashing and JWT creation/verification for authentication."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

if TYPE_CHECKING:
    from storefront.core.config import Settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenService:
    """
    Issues and verifies access and refresh JWTs.

    Access and refresh tokens are signed with distinct secrets, so a refresh
    token can never be replayed as a bearer token and vice versa. Each token
    also carries a "type" claim that is checked on decode.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        *,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=60),
        refresh_ttl: timedelta = timedelta(days=7),
    ) -> None:
        if not access_secret or not refresh_secret:
            raise ValueError("Access and refresh secrets are required")
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh secrets must differ")
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenService":
        return cls(
            settings.JWT_SECRET.get_secret_value(),
            settings.JWT_REFRESH_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            access_ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
            refresh_ttl=timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS),
        )

    def create_access_token(self, sub: str | int, email: str, role: str) -> str:
        """Create a JWT access token with sub (user id), email, role, and exp."""
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(sub),
            "email": email,
            "role": role,
            "type": ACCESS_TOKEN_TYPE,
            "exp": now + self.access_ttl,
            "iat": now,
        }
        return jwt.encode(payload, self._access_secret, algorithm=self.algorithm)

    def create_refresh_token(self, sub: str | int) -> tuple[str, datetime]:
        """Create a refresh JWT; returns (token, expires_at)."""
        now = datetime.now(UTC)
        expires_at = now + self.refresh_ttl
        payload: dict[str, Any] = {
            "sub": str(sub),
            "type": REFRESH_TOKEN_TYPE,
            # Nonce keeps two logins within the same second from producing identical tokens.
            "jti": secrets.token_urlsafe(16),
            "exp": expires_at,
            "iat": now,
        }
        return jwt.encode(payload, self._refresh_secret, algorithm=self.algorithm), expires_at

    def decode_access_token(self, token: str) -> dict[str, Any]:
        """
        Decode and validate an access JWT; return payload (sub, email, role, exp, iat).
        Raises jwt.PyJWTError on invalid or expired token.
        """
        return self._decode(token, self._access_secret, ACCESS_TOKEN_TYPE)

    def decode_refresh_token(self, token: str) -> dict[str, Any]:
        """
        Decode and validate a refresh JWT.
        Raises jwt.ExpiredSignatureError when expired, jwt.PyJWTError otherwise.
        """
        return self._decode(token, self._refresh_secret, REFRESH_TOKEN_TYPE)

    def _decode(self, token: str, secret: str, expected_type: str) -> dict[str, Any]:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[self.algorithm],
            options={"require": ["exp", "iat", "sub"]},
        )
        if payload.get("type") != expected_type:
            raise jwt.InvalidTokenError(f"Expected a {expected_type} token")
        return payload
