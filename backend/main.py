"""Main FastAPI application for FileAsk.

Entry point for the application. Configures:
- FastAPI app with settings
- CORS middleware for the single browser origin
- Exception handlers
- Route registration
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from apps.health import router as health_router
from config import get_app_config, get_cors_config, get_settings, setup_logging
from dependencies import get_interaction_log, get_llm_service
from responses import ResponseCode, error_dict
from router import router as api_router

# Setup logging
setup_logging(get_settings().log_level)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Management
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown."""
    # Startup
    logger.info("Starting FileAsk...")

    settings = get_settings()
    logger.info("Environment: %s", settings.environment)
    logger.info("LLM Model: %s", settings.gemini_model)
    logger.info("CORS origin: %s", settings.cors_origin)

    # The log store is checked but not required; queries still reach the model
    interaction_log = get_interaction_log()
    log_health = await interaction_log.health_check()
    if log_health.get("status") == "healthy":
        logger.info("✓ Firestore connected (latency: %sms)", log_health.get("latency_ms"))
    else:
        logger.error("Firestore unhealthy: %s", log_health.get("error"))

    logger.info("FileAsk started successfully")

    yield

    # Shutdown
    logger.info("Shutting down FileAsk...")
    await get_llm_service().aclose()
    await get_interaction_log().aclose()


# Create FastAPI app with lifespan
app_config = get_app_config()
app = FastAPI(lifespan=lifespan, **app_config)

# Add CORS middleware
cors_config = get_cors_config()
app.add_middleware(CORSMiddleware, **cors_config)


# =============================================================================
# Middleware
# =============================================================================


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests for tracing."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle Pydantic validation errors."""
    first_error = exc.errors()[0] if exc.errors() else {}
    field_name = first_error.get("loc", ["unknown"])[-1]

    error_response = error_dict(
        code=ResponseCode.VALIDATION_ERROR,
        details=str(exc.errors()),
        message=f"Validation failed for field '{field_name}'",
    )

    return JSONResponse(status_code=422, content=error_response)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Handle HTTP exceptions."""
    code_map = {
        404: ResponseCode.NOT_FOUND,
        405: ResponseCode.VALIDATION_ERROR,
    }

    response_code = code_map.get(exc.status_code, ResponseCode.INTERNAL_ERROR)

    error_response = error_dict(code=response_code, message=str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=error_response)


@app.exception_handler(Exception)
async def general_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unhandled exceptions."""
    logger.exception("Unhandled exception: %s", exc)

    error_response = error_dict(
        code=ResponseCode.INTERNAL_ERROR,
        message=str(exc),
    )

    return JSONResponse(status_code=500, content=error_response)


# =============================================================================
# Routes
# =============================================================================

app.include_router(health_router)
app.include_router(api_router, prefix="/api")


# =============================================================================
# Development Server
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=get_settings().port,
        reload=True,
    )
