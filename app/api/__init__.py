"""API routes mounted under API_PREFIX."""

from fastapi import APIRouter

from app.api import auth, catalog, health
from app.services.catalog import DEVICES, SERVICES

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(catalog.build_router(DEVICES), prefix="/devices", tags=["devices"])
router.include_router(catalog.build_router(SERVICES), prefix="/services", tags=["services"])
