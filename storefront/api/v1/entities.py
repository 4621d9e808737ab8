"""
CRUD routes for the commerce tables, generated from a declarative registry.

Each EntityConfig names a table and the roles allowed per operation (None means
public). Reads are guarded by bearer auth + role gate; mutations add the CSRF
guard, and public mutations run the CSRF guard alone.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status
from fastapi.params import Depends as DependsParam
from pydantic import BaseModel, ConfigDict, create_model
from sqlalchemy import Column, Table
from sqlalchemy.orm import Session

from storefront.api.v1.deps import require_roles, verify_csrf
from storefront.core.database import get_db
from storefront.core.errors import NotFoundError
from storefront.models import Role, User, commerce
from storefront.schemas.auth import MessageResponse
from storefront.schemas.entities import EntityListResponse, EntityResponse, PageMeta
from storefront.services.crud import CrudRepository

STAFF = frozenset({Role.admin, Role.staff})
ADMIN = frozenset({Role.admin})
PUBLIC = None

MAX_PAGE_SIZE = 100
ALL_OPERATIONS = frozenset({"list", "get", "create", "update", "delete"})
SERVER_MANAGED_COLUMNS = frozenset({"created_at", "updated_at", "last_updated"})


@dataclass(frozen=True)
class EntityConfig:
    table: Table
    read: frozenset[Role] | None = STAFF
    create: frozenset[Role] | None = STAFF
    update: frozenset[Role] | None = STAFF
    delete: frozenset[Role] | None = ADMIN
    hidden: frozenset[str] = frozenset()
    read_only: frozenset[str] = SERVER_MANAGED_COLUMNS
    operations: frozenset[str] = field(default=ALL_OPERATIONS)

    @property
    def name(self) -> str:
        return self.table.name


ENTITIES: tuple[EntityConfig, ...] = (
    EntityConfig(commerce.audit_logs, read=ADMIN, create=ADMIN, update=ADMIN),
    EntityConfig(commerce.brands, read=PUBLIC),
    EntityConfig(commerce.cart_items),
    EntityConfig(commerce.carts),
    EntityConfig(commerce.categories, read=PUBLIC),
    EntityConfig(
        commerce.customers,
        hidden=frozenset({"password_hash"}),
        read_only=SERVER_MANAGED_COLUMNS | {"password_hash"},
    ),
    EntityConfig(commerce.import_invoice_details),
    EntityConfig(commerce.import_invoices),
    EntityConfig(commerce.inventory),
    EntityConfig(commerce.order_details),
    EntityConfig(commerce.order_promotions),
    EntityConfig(commerce.orders),
    EntityConfig(commerce.payment_methods),
    EntityConfig(commerce.product_images, read=PUBLIC),
    EntityConfig(commerce.products, read=PUBLIC),
    EntityConfig(commerce.promotions),
    EntityConfig(commerce.reviews, read=PUBLIC, create=PUBLIC),
    EntityConfig(commerce.shipping_methods),
    EntityConfig(commerce.suppliers),
    EntityConfig(commerce.transactions),
    # Accounts are created through /register so the password is always hashed.
    EntityConfig(
        User.__table__,
        read=ADMIN,
        update=ADMIN,
        hidden=frozenset({"password_hash"}),
        read_only=SERVER_MANAGED_COLUMNS | {"password_hash"},
        operations=ALL_OPERATIONS - {"create"},
    ),
    EntityConfig(commerce.warehouses),
)


def _guards(allowed: frozenset[Role] | None, *, mutation: bool) -> list[DependsParam]:
    """Auth + role gate unless public, then CSRF for mutations, in that order."""
    deps: list[DependsParam] = []
    if allowed is not PUBLIC:
        deps.append(Depends(require_roles(*allowed)))
    if mutation:
        deps.append(Depends(verify_csrf))
    return deps


def _python_type(column: Column) -> Any:
    try:
        return column.type.python_type
    except NotImplementedError:
        return Any


def _is_required(column: Column) -> bool:
    return (
        not column.nullable
        and column.default is None
        and column.server_default is None
        and not column.primary_key
    )


def _body_model(config: EntityConfig, *, for_create: bool) -> type[BaseModel]:
    """Pydantic body model over the writable columns; unknown fields are rejected."""
    fields: dict[str, Any] = {}
    for column in config.table.columns:
        if column.primary_key or column.name in config.read_only:
            continue
        py_type = _python_type(column)
        if for_create and _is_required(column):
            fields[column.name] = (py_type, ...)
        else:
            fields[column.name] = (py_type | None, None)
    suffix = "Create" if for_create else "Update"
    model_name = "".join(part.capitalize() for part in config.name.split("_")) + suffix
    return create_model(model_name, __config__=ConfigDict(extra="forbid"), **fields)


def _visible(config: EntityConfig, row: dict[str, Any]) -> dict[str, Any]:
    if not config.hidden:
        return row
    return {k: v for k, v in row.items() if k not in config.hidden}


def build_entity_router(config: EntityConfig) -> APIRouter:
    """Create the GET/POST/PUT/DELETE routes for one table."""
    router = APIRouter()
    name = config.name
    ops = config.operations

    def get_repository(db: Annotated[Session, Depends(get_db)]) -> CrudRepository:
        return CrudRepository(db, config.table)

    Repo = Annotated[CrudRepository, Depends(get_repository)]

    if "list" in ops:

        @router.get(
            "",
            response_model=EntityListResponse,
            dependencies=_guards(config.read, mutation=False),
            summary=f"List {name}",
        )
        def list_rows(
            repo: Repo,
            limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = 10,
            page: Annotated[int, Query(ge=1)] = 1,
        ) -> EntityListResponse:
            rows, total = repo.get_all(limit=limit, offset=(page - 1) * limit)
            return EntityListResponse(
                data=[_visible(config, r) for r in rows],
                meta=PageMeta(limit=limit, page=page, total=total),
            )

    if "get" in ops:

        @router.get(
            "/{row_id}",
            response_model=EntityResponse,
            dependencies=_guards(config.read, mutation=False),
            summary=f"Get one {name} row",
        )
        def get_row(row_id: int, repo: Repo) -> EntityResponse:
            row = repo.get_by_id(row_id)
            if row is None:
                raise NotFoundError(f"{name} not found with ID: {row_id}")
            return EntityResponse(data=_visible(config, row))

    if "create" in ops:
        CreateBody = _body_model(config, for_create=True)

        @router.post(
            "",
            response_model=EntityResponse,
            status_code=status.HTTP_201_CREATED,
            dependencies=_guards(config.create, mutation=True),
            summary=f"Create a {name} row",
        )
        def create_row(body: CreateBody, repo: Repo) -> EntityResponse:  # type: ignore[valid-type]
            values = body.model_dump(exclude_unset=True)
            new_id = repo.insert(values)
            return EntityResponse(data=_visible(config, {repo.pk.name: new_id, **values}))

    if "update" in ops:
        UpdateBody = _body_model(config, for_create=False)

        @router.put(
            "/{row_id}",
            response_model=MessageResponse,
            dependencies=_guards(config.update, mutation=True),
            summary=f"Update a {name} row",
        )
        def update_row(row_id: int, body: UpdateBody, repo: Repo) -> MessageResponse:  # type: ignore[valid-type]
            if repo.update(row_id, body.model_dump(exclude_unset=True)) == 0:
                raise NotFoundError(f"{name} not found with ID: {row_id}")
            return MessageResponse(message="Updated successfully")

    if "delete" in ops:

        @router.delete(
            "/{row_id}",
            response_model=MessageResponse,
            dependencies=_guards(config.delete, mutation=True),
            summary=f"Delete a {name} row",
        )
        def delete_row(row_id: int, repo: Repo) -> MessageResponse:
            if repo.delete(row_id) == 0:
                raise NotFoundError(f"{name} not found with ID: {row_id}")
            return MessageResponse(message="Deleted successfully")

    return router
