"""Google Gemini LLM implementation over the REST generateContent endpoint."""

import logging
from typing import Any

import httpx

from config import Settings, get_settings

from .base import BaseLLMService, LLMError, UpstreamAPIError

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "No response generated"


def extract_answer(payload: Any) -> str:
    """Return the first candidate's first text part, or a fixed fallback."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return NO_RESPONSE_TEXT
    return text or NO_RESPONSE_TEXT


class GeminiService(BaseLLMService):
    """Gemini LLM service via the generative language API.

    The API key travels as the ``key`` query parameter. Failed calls are
    never retried.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.url = self.settings.generate_content_url

        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout=self.settings.llm_timeout_seconds, connect=10.0),
        )

    async def generate(self, prompt: str) -> str:
        """Generate a response using Gemini."""
        body = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            response = await self._client.post(
                self.url,
                params={"key": self.settings.gemini_api_key},
                json=body,
            )
        except httpx.HTTPError as e:
            logger.error("Gemini request failed: %s", e)
            raise LLMError(f"Gemini request failed: {e}") from e

        if not response.is_success:
            logger.error("Gemini API error %d: %s", response.status_code, response.text)
            raise UpstreamAPIError(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as e:
            raise LLMError(f"Invalid JSON from Gemini: {e}") from e

        return extract_answer(payload)

    async def aclose(self) -> None:
        await self._client.aclose()
