"""Standardized error responses for API endpoints.

Error bodies share one shape: ``{"error": ..., "details"?: ..., "message"?: ...}``.
Optional keys are omitted rather than sent as null.
"""

from enum import Enum
from typing import Any

from fastapi.responses import JSONResponse


class ResponseCode(str, Enum):
    """Error kinds surfaced by the relay."""

    PROMPT_REQUIRED = "prompt_required"
    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    UPSTREAM_ERROR = "upstream_error"
    INTERNAL_ERROR = "internal_error"


# Response messages mapped to codes
RESPONSE_MESSAGES: dict[ResponseCode, str] = {
    ResponseCode.PROMPT_REQUIRED: "Prompt is required",
    ResponseCode.VALIDATION_ERROR: "Request validation failed",
    ResponseCode.NOT_FOUND: "Not found",
    ResponseCode.UPSTREAM_ERROR: "Failed to get response from AI",
    ResponseCode.INTERNAL_ERROR: "Internal server error",
}

# HTTP status codes for each response code
HTTP_STATUS_MAP: dict[ResponseCode, int] = {
    ResponseCode.PROMPT_REQUIRED: 400,
    ResponseCode.VALIDATION_ERROR: 422,
    ResponseCode.NOT_FOUND: 404,
    ResponseCode.UPSTREAM_ERROR: 502,
    ResponseCode.INTERNAL_ERROR: 500,
}


def get_message(code: ResponseCode) -> str:
    """Get the message for a response code."""
    return RESPONSE_MESSAGES.get(code, "Unknown error")


def get_http_status(code: ResponseCode) -> int:
    """Get HTTP status code for a response code."""
    return HTTP_STATUS_MAP.get(code, 500)


def error_dict(
    code: ResponseCode,
    details: Any = None,
    message: str | None = None,
) -> dict[str, Any]:
    """Build an error response dictionary."""
    body: dict[str, Any] = {"error": get_message(code)}
    if details is not None:
        body["details"] = details
    if message is not None:
        body["message"] = message
    return body


def error_response(
    code: ResponseCode,
    details: Any = None,
    message: str | None = None,
    status_code: int | None = None,
) -> JSONResponse:
    """Create a JSONResponse with error format.

    ``status_code`` overrides the code's default status, which is how
    upstream statuses are passed through unchanged.
    """
    return JSONResponse(
        content=error_dict(code, details, message),
        status_code=status_code or get_http_status(code),
    )
