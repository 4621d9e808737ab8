"""Unit tests for AuthService with a mocked CredentialStore."""

import unittest
from datetime import timedelta
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import IntegrityError

from storefront.core.errors import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from storefront.core.security import TokenService, hash_password
from storefront.models import Role, User
from storefront.services.auth import AuthService


def _user(user_id: int = 1, role: Role = Role.staff, password: str = "secret1") -> User:
    return User(
        account_id=user_id,
        username="a",
        email="a@x.com",
        password_hash=hash_password(password, rounds=4),
        role=role,
    )


class AuthServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MagicMock()
        self.tokens = TokenService("access-secret", "refresh-secret")
        self.auth = AuthService(self.store, self.tokens, bcrypt_rounds=4)


class TestRegister(AuthServiceTestCase):
    def test_conflict_on_precheck_skips_insert(self) -> None:
        self.store.find_user_by_email_or_username.return_value = _user()
        with self.assertRaises(ConflictError):
            self.auth.register(email="a@x.com", username="a", password="secret1", role=Role.staff)
        self.store.create_user.assert_not_called()

    def test_integrity_error_maps_to_conflict(self) -> None:
        self.store.find_user_by_email_or_username.return_value = None
        self.store.create_user.side_effect = IntegrityError("INSERT", {}, Exception("dup"))
        with self.assertRaises(ConflictError):
            self.auth.register(email="a@x.com", username="a", password="secret1", role=Role.staff)

    def test_stores_hash_not_plaintext(self) -> None:
        self.store.find_user_by_email_or_username.return_value = None
        self.store.create_user.return_value = _user(user_id=42)
        user_id = self.auth.register(
            email="a@x.com", username="a", password="secret1", role=Role.admin
        )
        self.assertEqual(user_id, 42)
        kwargs = self.store.create_user.call_args.kwargs
        self.assertNotEqual(kwargs["password_hash"], "secret1")
        self.assertEqual(kwargs["role"], Role.admin)

    def test_storage_error_propagates(self) -> None:
        self.store.find_user_by_email_or_username.side_effect = StorageError()
        with self.assertRaises(StorageError):
            self.auth.register(email="a@x.com", username="a", password="secret1", role=Role.staff)


class TestLogin(AuthServiceTestCase):
    def test_unknown_email_and_wrong_password_raise_same_error(self) -> None:
        self.store.get_user_by_email.return_value = None
        with self.assertRaises(AuthenticationError) as unknown:
            self.auth.login("a@x.com", "secret1")
        self.store.get_user_by_email.return_value = _user()
        with self.assertRaises(AuthenticationError) as wrong:
            self.auth.login("a@x.com", "wrong-password")
        self.assertEqual(unknown.exception.message, wrong.exception.message)
        self.store.save_refresh_token.assert_not_called()

    def test_unknown_email_still_runs_a_bcrypt_check(self) -> None:
        self.store.get_user_by_email.return_value = None
        with patch("storefront.services.auth.verify_password", return_value=False) as verify:
            with self.assertRaises(AuthenticationError):
                self.auth.login("nobody@x.com", "secret1")
        verify.assert_called_once()
        password, hashed = verify.call_args.args
        self.assertEqual(password, "secret1")
        self.assertTrue(hashed.startswith("$2"))

    def test_success_upserts_refresh_token(self) -> None:
        self.store.get_user_by_email.return_value = _user(user_id=5, role=Role.admin)
        result = self.auth.login("a@x.com", "secret1")
        self.store.save_refresh_token.assert_called_once_with(
            5, result.refresh_token, result.refresh_expires_at
        )
        payload = self.tokens.decode_access_token(result.access_token)
        self.assertEqual(payload["role"], "admin")
        self.assertEqual(self.tokens.decode_refresh_token(result.refresh_token)["sub"], "5")


class TestRefresh(AuthServiceTestCase):
    def test_missing_token(self) -> None:
        with self.assertRaises(ValidationError):
            self.auth.refresh(None)

    def test_store_is_checked_before_signature(self) -> None:
        self.store.find_refresh_token.return_value = None
        with self.assertRaises(ForbiddenError) as ctx:
            self.auth.refresh("not-even-a-jwt")
        self.assertEqual(ctx.exception.message, "Invalid refresh token")

    def test_expired_but_stored(self) -> None:
        issuer = TokenService("access-secret", "refresh-secret", refresh_ttl=timedelta(seconds=-5))
        token, _ = issuer.create_refresh_token(sub=1)
        self.store.find_refresh_token.return_value = MagicMock(user_id=1)
        with self.assertRaises(ForbiddenError) as ctx:
            self.auth.refresh(token)
        self.assertEqual(ctx.exception.message, "Refresh token expired")

    def test_subject_mismatch_is_rejected(self) -> None:
        token, _ = self.tokens.create_refresh_token(sub=2)
        self.store.find_refresh_token.return_value = MagicMock(user_id=1)
        with self.assertRaises(ForbiddenError):
            self.auth.refresh(token)

    def test_deleted_user_raises_not_found(self) -> None:
        token, _ = self.tokens.create_refresh_token(sub=1)
        self.store.find_refresh_token.return_value = MagicMock(user_id=1)
        self.store.get_user_by_id.return_value = None
        with self.assertRaises(NotFoundError):
            self.auth.refresh(token)

    def test_success_mints_access_token_only(self) -> None:
        token, _ = self.tokens.create_refresh_token(sub=1)
        self.store.find_refresh_token.return_value = MagicMock(user_id=1)
        self.store.get_user_by_id.return_value = _user(user_id=1)
        access_token, user = self.auth.refresh(token)
        self.assertEqual(user.account_id, 1)
        self.assertEqual(self.tokens.decode_access_token(access_token)["email"], "a@x.com")
        self.store.save_refresh_token.assert_not_called()


class TestLogout(AuthServiceTestCase):
    def test_missing_token(self) -> None:
        with self.assertRaises(ValidationError):
            self.auth.logout("")

    def test_deleting_unknown_token_is_not_an_error(self) -> None:
        self.store.delete_refresh_token.return_value = 0
        self.auth.logout("gone")
        self.store.delete_refresh_token.assert_called_once_with("gone")


if __name__ == "__main__":
    unittest.main()
