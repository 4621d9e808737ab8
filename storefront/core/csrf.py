"""CSRF double-submit tokens: a signed nonce set as a cookie and echoed in a header."""

import hmac
import secrets

from itsdangerous import BadSignature, URLSafeTimedSerializer

CSRF_COOKIE_NAME = "csrf_token"
CSRF_HEADER_NAME = "X-CSRF-Token"
SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


class CsrfProtect:
    """Issues and validates signed CSRF tokens."""

    def __init__(self, secret: str, *, max_age_seconds: int = 7 * 24 * 60 * 60) -> None:
        if not secret:
            raise ValueError("CSRF secret is required")
        self._serializer = URLSafeTimedSerializer(secret, salt="csrf-token")
        self.max_age_seconds = max_age_seconds

    def issue(self) -> str:
        return self._serializer.dumps(secrets.token_urlsafe(16))

    def validate(self, cookie_token: str | None, header_token: str | None) -> bool:
        """
        True when both tokens are present, identical, and carry a valid, unexpired signature.
        """
        if not cookie_token or not header_token:
            return False
        if not hmac.compare_digest(cookie_token.encode("utf-8"), header_token.encode("utf-8")):
            return False
        try:
            self._serializer.loads(cookie_token, max_age=self.max_age_seconds)
        except BadSignature:
            return False
        return True
