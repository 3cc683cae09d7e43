"""API routes."""

from fastapi import APIRouter

from pushups.api import challenge, health, push

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(challenge.router, tags=["challenge"])
router.include_router(push.router, tags=["push"])
