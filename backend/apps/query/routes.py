"""Query routes - registers all query endpoints."""

from fastapi import APIRouter

from apps.query.handlers import submit_query
from apps.query.handlers.submit_query import QueryResponse

router = APIRouter(prefix="/query", tags=["Query"])

# POST /query - Ask a question
router.post("", response_model=QueryResponse)(submit_query)
