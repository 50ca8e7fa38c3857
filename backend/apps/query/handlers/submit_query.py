"""POST /query - Forward a prompt to the model and return its answer."""

import logging
import uuid

from fastapi import Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from dependencies import get_relay_service
from llm import UpstreamAPIError
from responses import ResponseCode, error_response
from services import FileMetadata, RelayService

logger = logging.getLogger(__name__)


# --- Request/Response Schemas (API-specific) ---


class QueryRequest(BaseModel):
    """Request body for the query endpoint.

    ``query`` and ``file`` are optional. Without them the relay re-parses
    ``prompt`` to recover what it can.
    """

    prompt: str | None = Field(None, description="Full prompt sent to the model")
    query: str | None = Field(None, description="The user's question on its own")
    file: FileMetadata | None = Field(None, description="Uploaded file metadata")


class QueryResponse(BaseModel):
    """Successful answer."""

    answer: str


# --- Handler ---


async def submit_query(
    body: QueryRequest,
    request: Request,
    relay: RelayService = Depends(get_relay_service),
) -> QueryResponse | JSONResponse:
    """Answer a question about an uploaded file.

    Errors:
    - 400 when the prompt is missing or blank
    - upstream status and body when the model API rejects the call
    - 500 with the exception message for anything else
    """
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())[:8]

    if not body.prompt or not body.prompt.strip():
        return error_response(ResponseCode.PROMPT_REQUIRED)

    try:
        answer = await relay.handle_query(
            body.prompt,
            file=body.file,
            query=body.query,
            request_id=request_id,
        )
        return QueryResponse(answer=answer)

    except UpstreamAPIError as e:
        logger.warning("[%s] Model API error %d", request_id, e.status_code)
        return error_response(
            ResponseCode.UPSTREAM_ERROR,
            details=e.body,
            status_code=e.status_code,
        )

    except Exception as e:
        logger.exception("[%s] Unexpected error during query", request_id)
        return error_response(ResponseCode.INTERNAL_ERROR, message=str(e))
