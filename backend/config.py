"""Configuration and settings for the FileAsk relay.

Uses Pydantic Settings for fail-fast validation on startup.
Required environment variables are validated the first time settings load.
"""

import logging
import sys
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("fitz").setLevel(logging.WARNING)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Raises ValidationError on startup if required variables are missing.
    """

    model_config = SettingsConfigDict(
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Gemini (required)
    gemini_api_key: str = Field(..., description="Google Gemini API key")
    gemini_model: str = Field(
        default="gemini-2.5-flash", description="Gemini model used for answers"
    )
    gemini_api_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the generative language API",
    )
    llm_timeout_seconds: float = Field(
        default=60.0, description="Total timeout for a model call in seconds"
    )

    # Firebase Configuration (required for the interaction log)
    # Can be a JSON string, a file path, or base64 of the credentials JSON
    firebase_credentials: str = Field(
        ..., description="Firebase service account JSON string or path to JSON file"
    )
    interactions_collection: str = Field(
        default="interactions", description="Firestore collection for interactions"
    )
    strict_interaction_log: bool = Field(
        default=False,
        description="Fail the request when the interaction log write fails",
    )

    # Application Settings
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")
    port: int = Field(default=5000, description="Port for the development server")
    cors_origin: str = Field(
        default="http://localhost:3000", description="Browser origin allowed by CORS"
    )

    @field_validator("gemini_api_key")
    @classmethod
    def validate_api_key_not_empty(cls, v: str, info) -> str:
        """Ensure API keys are not empty strings."""
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty")
        return v.strip()

    @property
    def generate_content_url(self) -> str:
        """Full generateContent endpoint for the configured model."""
        base = self.gemini_api_base_url.rstrip("/")
        return f"{base}/models/{self.gemini_model}:generateContent"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# FastAPI App Configuration
APP_CONFIG: dict[str, Any] = {
    "title": "FileAsk",
    "description": (
        "Relay between an uploaded-file question UI and the Gemini API. "
        "Every answered question is recorded in the interaction log."
    ),
    "version": "0.1.0",
    "docs_url": "/api/docs",
    "redoc_url": "/api/redoc",
    "openapi_url": "/api/openapi.json",
    "openapi_tags": [
        {
            "name": "Health",
            "description": "Health check and service status",
        },
        {
            "name": "Query",
            "description": "Questions about uploaded files",
        },
    ],
}


def get_app_config() -> dict[str, Any]:
    """Get FastAPI application configuration."""
    return APP_CONFIG.copy()


def get_cors_config(settings: Settings | None = None) -> dict[str, Any]:
    """Get CORS middleware configuration for the single configured origin."""
    settings = settings or get_settings()
    return {
        "allow_origins": [settings.cors_origin],
        "allow_credentials": True,
        "allow_methods": ["GET", "POST", "OPTIONS"],
        "allow_headers": ["Content-Type", "Authorization"],
    }
