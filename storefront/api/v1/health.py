"""Health check: process liveness and database reachability."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.core.database import check_db_connected, get_db
from storefront.schemas.entities import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(response: Response, db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Return 200 when the database answers, 503 (status "degraded") when it does not."""
    if check_db_connected(db):
        return HealthResponse(status="ok", environment=settings.APP_ENV, database="connected")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(status="degraded", environment=settings.APP_ENV, database="disconnected")
