"""Base LLM service interface.

Defines the contract that all LLM providers must implement.
"""

from abc import ABC, abstractmethod


class LLMError(Exception):
    """Raised when LLM generation fails."""


class UpstreamAPIError(LLMError):
    """Raised when the model API answers with a non-success status.

    Carries the upstream status code and raw body so callers can pass
    them through unchanged.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Model API returned {status_code}")
        self.status_code = status_code
        self.body = body


class BaseLLMService(ABC):
    """Abstract base class for LLM services."""

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Generate a single response.

        Args:
            prompt: Full prompt, sent as one user content part.

        Returns:
            Generated text.

        Raises:
            UpstreamAPIError: If the provider answers with a non-2xx status.
            LLMError: If the provider cannot be reached.
        """

    async def aclose(self) -> None:
        """Release network resources held by the service."""
