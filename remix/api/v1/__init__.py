"""API routes."""

from fastapi import APIRouter

from remix.api.v1 import auth, health, recipes, remixes, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(recipes.router, prefix="/recipes", tags=["recipes"])
router.include_router(remixes.router, prefix="/remixes", tags=["remixes"])
