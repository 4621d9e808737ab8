"""Response envelopes shared by the entity routes and the health check."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class PageMeta(BaseModel):
    limit: int
    page: int
    total: int


class EntityListResponse(BaseModel):
    """{"data": [...], "meta": {...}} for paginated list endpoints."""

    data: list[dict[str, Any]]
    meta: PageMeta


class EntityResponse(BaseModel):
    data: dict[str, Any]


class HealthResponse(BaseModel):
    """Liveness plus database reachability; "degraded" when the database is down."""

    status: Literal["ok", "degraded"] = Field(description="Service status")
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"]
