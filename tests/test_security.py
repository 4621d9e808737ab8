"""Unit tests for password hashing, TokenService and CsrfProtect."""

import unittest
from datetime import timedelta

import jwt

from storefront.core.csrf import CsrfProtect
from storefront.core.security import TokenService, hash_password, verify_password


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_salted_and_verifies(self) -> None:
        first = hash_password("secret1", rounds=4)
        second = hash_password("secret1", rounds=4)
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("secret1", first))
        self.assertTrue(verify_password("secret1", second))

    def test_wrong_password_does_not_verify(self) -> None:
        hashed = hash_password("secret1", rounds=4)
        self.assertFalse(verify_password("secret2", hashed))

    def test_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("secret1", "not-a-bcrypt-hash"))


class TestTokenService(unittest.TestCase):
    def setUp(self) -> None:
        self.tokens = TokenService("access-secret", "refresh-secret")

    def test_rejects_missing_or_equal_secrets(self) -> None:
        with self.assertRaises(ValueError):
            TokenService("", "refresh-secret")
        with self.assertRaises(ValueError):
            TokenService("same", "same")

    def test_access_token_round_trip(self) -> None:
        token = self.tokens.create_access_token(sub=7, email="a@x.com", role="admin")
        payload = self.tokens.decode_access_token(token)
        self.assertEqual(payload["sub"], "7")
        self.assertEqual(payload["email"], "a@x.com")
        self.assertEqual(payload["role"], "admin")
        self.assertEqual(payload["type"], "access")

    def test_refresh_tokens_are_unique_per_call(self) -> None:
        first, _ = self.tokens.create_refresh_token(sub=7)
        second, _ = self.tokens.create_refresh_token(sub=7)
        self.assertNotEqual(first, second)

    def test_tokens_are_not_interchangeable(self) -> None:
        access = self.tokens.create_access_token(sub=1, email="a@x.com", role="staff")
        refresh, _ = self.tokens.create_refresh_token(sub=1)
        with self.assertRaises(jwt.PyJWTError):
            self.tokens.decode_refresh_token(access)
        with self.assertRaises(jwt.PyJWTError):
            self.tokens.decode_access_token(refresh)

    def test_wrong_type_with_right_secret_is_rejected(self) -> None:
        token = jwt.encode(
            {"sub": "1", "type": "refresh", "iat": 0, "exp": 4102444800},
            "access-secret",
            algorithm="HS256",
        )
        with self.assertRaises(jwt.InvalidTokenError):
            self.tokens.decode_access_token(token)

    def test_expired_refresh_token_raises_expired(self) -> None:
        issuer = TokenService(
            "access-secret", "refresh-secret", refresh_ttl=timedelta(seconds=-1)
        )
        token, _ = issuer.create_refresh_token(sub=1)
        with self.assertRaises(jwt.ExpiredSignatureError):
            self.tokens.decode_refresh_token(token)


class TestCsrfProtect(unittest.TestCase):
    def setUp(self) -> None:
        self.csrf = CsrfProtect("csrf-secret")

    def test_issued_token_validates_when_echoed(self) -> None:
        token = self.csrf.issue()
        self.assertTrue(self.csrf.validate(token, token))

    def test_absent_or_mismatched_tokens_fail(self) -> None:
        token = self.csrf.issue()
        self.assertFalse(self.csrf.validate(None, token))
        self.assertFalse(self.csrf.validate(token, None))
        self.assertFalse(self.csrf.validate(token, self.csrf.issue()))

    def test_token_signed_with_other_secret_fails(self) -> None:
        foreign = CsrfProtect("other-secret").issue()
        self.assertFalse(self.csrf.validate(foreign, foreign))

    def test_expired_token_fails(self) -> None:
        token = self.csrf.issue()
        strict = CsrfProtect("csrf-secret", max_age_seconds=-1)
        self.assertFalse(strict.validate(token, token))

    def test_non_ascii_tokens_fail_without_raising(self) -> None:
        token = self.csrf.issue()
        self.assertFalse(self.csrf.validate(token, "café"))
        self.assertFalse(self.csrf.validate("café", "café"))


if __name__ == "__main__":
    unittest.main()
