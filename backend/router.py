"""Main API router that registers all sub-routers.

This module aggregates the `/api` routers into a single router
that gets mounted in main.py. Health lives outside `/api`.
"""

from fastapi import APIRouter

from apps.query import router as query_router

# Create main API router
router = APIRouter()

# Register all domain routers
router.include_router(query_router)
