"""Query handlers."""

from apps.query.handlers.submit_query import submit_query

__all__ = ["submit_query"]
