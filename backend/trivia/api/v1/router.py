"""API v1 router - includes all v1 endpoints."""

from fastapi import APIRouter

from trivia.api.v1.endpoints import admin_content, admin_promotion, health

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(health.router, prefix="", tags=["Health"])
api_router.include_router(admin_content.router)
api_router.include_router(admin_promotion.router)
