"""Health module - liveness endpoint."""

from apps.health.routes import router

__all__ = ["router"]
