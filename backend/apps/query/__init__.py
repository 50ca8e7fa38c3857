"""Query module - questions about uploaded files."""

from apps.query.routes import router

__all__ = ["router"]
