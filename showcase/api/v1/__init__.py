"""API v1 routes."""

from fastapi import APIRouter

from showcase.api.v1 import admin, auth, health, websites

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(websites.router, prefix="/websites", tags=["websites"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
