"""API v1 routes."""

from fastapi import APIRouter

from storefront.api.v1 import auth, health
from storefront.api.v1.entities import ENTITIES, build_entity_router

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
for entity in ENTITIES:
    router.include_router(
        build_entity_router(entity), prefix=f"/{entity.name}", tags=[entity.name]
    )
