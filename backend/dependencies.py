"""FastAPI dependency injection for services.

Services are cached with @lru_cache() to avoid recreation per request.
"""

from functools import lru_cache

from fastapi import Depends

from config import Settings, get_settings
from db import InteractionLogService
from llm import BaseLLMService, LLMService
from services import RelayService

# --- Cached Singletons ---
# These are created once and reused across all requests


@lru_cache
def get_llm_service() -> BaseLLMService:
    """Get cached LLM service (holds a pooled HTTP client)."""
    return LLMService(get_settings())


@lru_cache
def get_interaction_log() -> InteractionLogService:
    """Get cached interaction log (holds the Firestore client)."""
    return InteractionLogService(get_settings())


# --- Composed Services ---


def get_relay_service(
    settings: Settings = Depends(get_settings),
    llm: BaseLLMService = Depends(get_llm_service),
    interaction_log: InteractionLogService = Depends(get_interaction_log),
) -> RelayService:
    """Get relay service with injected dependencies."""
    return RelayService(
        settings=settings,
        llm=llm,
        interaction_log=interaction_log,
    )
