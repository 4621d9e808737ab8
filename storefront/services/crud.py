"""Generic parameterized CRUD over a single-primary-key table."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Table, delete, func, insert, select, update
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.core.errors import ConflictError, StorageError, ValidationError

logger = logging.getLogger(__name__)


class CrudRepository:
    """
    get_all / get_by_id / insert / update / delete for one table.

    Integrity violations (duplicate or dangling reference) become ConflictError.
    Any other database failure becomes StorageError with a generic message.
    """

    def __init__(self, session: Session, table: Table) -> None:
        pk_columns = list(table.primary_key.columns)
        if len(pk_columns) != 1:
            raise ValueError(f"Table {table.name} must have exactly one primary key column")
        self.session = session
        self.table = table
        self.pk = pk_columns[0]

    @contextmanager
    def _guard(self, action: str, **context: Any) -> Iterator[None]:
        name = self.table.name
        try:
            yield
        except IntegrityError as e:
            self.session.rollback()
            logger.warning("%s %s violated a constraint", action, name, extra=context)
            raise ConflictError(f"{name} conflicts with an existing or missing record") from e
        except DataError as e:
            self.session.rollback()
            logger.warning("%s %s rejected data", action, name, extra=context)
            raise ValidationError(f"Invalid data for {name}") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("%s %s failed", action, name, extra=context)
            raise StorageError(cause=e) from e

    def get_all(self, limit: int = 10, offset: int = 0) -> tuple[list[dict[str, Any]], int]:
        """Return one page of rows ordered by primary key, plus the table's total row count."""
        with self._guard("get_all", limit=limit, offset=offset):
            rows = self.session.execute(
                select(self.table).order_by(self.pk).limit(limit).offset(offset)
            ).mappings().all()
            total = self.session.execute(
                select(func.count()).select_from(self.table)
            ).scalar_one()
        return [dict(r) for r in rows], total

    def get_by_id(self, row_id: int) -> dict[str, Any] | None:
        with self._guard("get_by_id", row_id=row_id):
            row = self.session.execute(
                select(self.table).where(self.pk == row_id)
            ).mappings().first()
        return dict(row) if row is not None else None

    def insert(self, values: dict[str, Any]) -> int:
        """Insert one row and return its primary key."""
        if not values:
            raise ValidationError("Data cannot be empty")
        with self._guard("insert"):
            result = self.session.execute(insert(self.table).values(**values))
            self.session.commit()
        return result.inserted_primary_key[0]

    def update(self, row_id: int, values: dict[str, Any]) -> int:
        """Update one row; returns affected row count (0 when the id does not exist)."""
        if not values:
            raise ValidationError("Update data cannot be empty")
        with self._guard("update", row_id=row_id):
            result = self.session.execute(
                update(self.table).where(self.pk == row_id).values(**values)
            )
            self.session.commit()
        return result.rowcount

    def delete(self, row_id: int) -> int:
        with self._guard("delete", row_id=row_id):
            result = self.session.execute(delete(self.table).where(self.pk == row_id))
            self.session.commit()
        return result.rowcount
