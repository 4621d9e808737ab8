"""Credential store: exact-match reads and single-row writes for users and refresh tokens."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import delete, or_, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.core.errors import StorageError
from storefront.models import RefreshToken, Role, User

logger = logging.getLogger(__name__)

# Dialects with a native single-statement upsert (INSERT ... ON CONFLICT DO UPDATE).
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CredentialStore:
    """
    Thin accessor over the users and refresh_tokens tables.

    Unique-constraint violations are re-raised as IntegrityError after rollback so
    callers can map them; every other SQLAlchemy failure becomes StorageError.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError:
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Credential store failure during %s", action)
            raise StorageError(cause=e) from e

    def get_user_by_id(self, user_id: int) -> User | None:
        with self._guard("get_user_by_id"):
            return self.session.get(User, user_id)

    def get_user_by_email(self, email: str) -> User | None:
        with self._guard("get_user_by_email"):
            return self.session.scalars(select(User).where(User.email == email)).first()

    def find_user_by_email_or_username(self, email: str, username: str) -> User | None:
        with self._guard("find_user_by_email_or_username"):
            return self.session.scalars(
                select(User).where(or_(User.email == email, User.username == username))
            ).first()

    def create_user(
        self,
        *,
        email: str,
        username: str,
        password_hash: str,
        role: Role,
    ) -> User:
        """Insert a user and commit. Raises IntegrityError on duplicate email/username."""
        user = User(
            email=email,
            username=username,
            password_hash=password_hash,
            role=role,
        )
        with self._guard("create_user"):
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        return user

    def save_refresh_token(self, user_id: int, token: str, expires_at: datetime) -> None:
        """Upsert the user's refresh token; any previous token for the user is overwritten."""
        with self._guard("save_refresh_token"):
            dialect = self.session.get_bind().dialect.name
            insert = _UPSERT_INSERTS.get(dialect)
            if insert is None:
                self.session.merge(
                    RefreshToken(user_id=user_id, token=token, expires_at=expires_at)
                )
            else:
                stmt = insert(RefreshToken).values(
                    user_id=user_id, token=token, expires_at=expires_at
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=["user_id"],
                    set_={"token": stmt.excluded.token, "expires_at": stmt.excluded.expires_at},
                )
                self.session.execute(stmt)
            self.session.commit()

    def find_refresh_token(self, token: str) -> RefreshToken | None:
        with self._guard("find_refresh_token"):
            return self.session.scalars(
                select(RefreshToken).where(RefreshToken.token == token)
            ).first()

    def delete_refresh_token(self, token: str) -> int:
        """Delete the row holding this token. Returns rows deleted (0 if already gone)."""
        with self._guard("delete_refresh_token"):
            result = self.session.execute(delete(RefreshToken).where(RefreshToken.token == token))
            self.session.commit()
        return result.rowcount or 0
