"""GET /health - Report that the relay process is up."""

from pydantic import BaseModel, Field

# --- Response Schemas ---


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Always 'OK' while the process serves requests")
    message: str = Field(..., description="Human-readable status")


# --- Handler ---


async def check_health() -> HealthResponse:
    """Liveness check. Does not touch the model API or the log store."""
    return HealthResponse(status="OK", message="Server is running")
