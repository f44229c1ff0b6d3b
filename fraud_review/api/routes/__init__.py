"""API routes package."""

from fastapi import APIRouter

from fraud_review.api.routes.auth import router as auth_router
from fraud_review.api.routes.health import router as health_router
from fraud_review.api.routes.transactions import router as transactions_router

# Create API router with all sub-routers
api_router = APIRouter()

# Register all route modules
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(transactions_router)


__all__ = [
    "api_router",
    "auth_router",
    "health_router",
    "transactions_router",
]
