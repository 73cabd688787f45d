"""Main API routers."""

from fastapi import APIRouter

from src.api.auth import router as auth_router
from src.api.readme import router as readme_router

api_router = APIRouter(prefix="/api")
api_router.include_router(readme_router, tags=["readme"])

# OAuth endpoints live outside /api because GitHub redirects browsers to them
oauth_router = APIRouter(prefix="/auth")
oauth_router.include_router(auth_router, tags=["auth"])
