"""HTTP client for the relay, mirroring what the browser UI does.

Input problems are reported before any request is made. Only one
question may be outstanding per client at a time.
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from client.context import UploadedFile, build_context, build_prompt

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"
NO_ANSWER_TEXT = "No response"


class ClientInputError(Exception):
    """Raised for input problems caught before contacting the relay."""


class BackendError(Exception):
    """Raised when the relay cannot be reached or answers with an error."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(f"Backend error: {detail}")
        self.status_code = status_code


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return body.get("message") or body.get("details") or body.get("error") or str(body)
    return str(body)


class QueryClient:
    """Client for the relay's query and health endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = http_client or httpx.AsyncClient()
        self.loading = False

    def validate(self, files: Sequence[UploadedFile], query: str) -> None:
        """Check a question before sending it."""
        if not query or not query.strip():
            raise ClientInputError("Please enter a question")
        if not files:
            raise ClientInputError("Please upload at least one file")
        if self.loading:
            raise ClientInputError("A query is already in progress")

    async def ask(self, files: Sequence[UploadedFile], query: str) -> str:
        """Ask a question about the given files and return the answer.

        Raises:
            ClientInputError: Blank question, no files, or a query already running.
            BackendError: The relay failed or could not be reached.
        """
        self.validate(files, query)

        prompt = build_prompt(build_context(files), query)
        payload: dict[str, Any] = {
            "prompt": prompt,
            "query": query,
            "file": files[0].to_metadata(),
        }

        self.loading = True
        try:
            response = await self._client.post(f"{self.base_url}/api/query", json=payload)
        except httpx.HTTPError as e:
            logger.error("Relay request failed: %s", e)
            raise BackendError(str(e)) from e
        finally:
            self.loading = False

        if not response.is_success:
            raise BackendError(_error_detail(response), response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            raise BackendError(f"Invalid response: {e}", response.status_code) from e
        if not isinstance(body, dict):
            raise BackendError("Invalid response body", response.status_code)

        return body.get("answer") or NO_ANSWER_TEXT

    async def health(self) -> dict[str, Any]:
        """Fetch the relay's health status."""
        try:
            response = await self._client.get(f"{self.base_url}/health")
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise BackendError(str(e)) from e
        return response.json()

    async def aclose(self) -> None:
        await self._client.aclose()
