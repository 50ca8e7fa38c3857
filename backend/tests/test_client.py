"""Tests for the relay query client."""

import json

import httpx
import pytest

from client import BackendError, ClientInputError, QueryClient, UploadedFile


def make_client(handler) -> QueryClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return QueryClient("http://relay.test", http_client=http_client)


def make_file(name: str = "a.txt", content: str = "hello") -> UploadedFile:
    return UploadedFile(
        name=name, type="text/plain", size=len(content), category="text", content=content
    )


class TestQueryClient:
    """Tests for QueryClient."""

    def setup_method(self):
        """Set up a client that records every request."""
        self.requests = []
        self.reply = httpx.Response(200, json={"answer": "It says hello."})

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return self.reply

        self.client = make_client(handler)

    @pytest.mark.asyncio
    async def test_empty_question(self):
        """Test a blank question fails without a network call."""
        with pytest.raises(ClientInputError, match="Please enter a question"):
            await self.client.ask([make_file()], "   ")

        assert self.requests == []

    @pytest.mark.asyncio
    async def test_question_checked_before_files(self):
        """Test the question is validated first."""
        with pytest.raises(ClientInputError, match="Please enter a question"):
            await self.client.ask([], "")

    @pytest.mark.asyncio
    async def test_no_files(self):
        """Test asking without a file fails without a network call."""
        with pytest.raises(ClientInputError, match="Please upload at least one file"):
            await self.client.ask([], "what is this?")

        assert self.requests == []

    @pytest.mark.asyncio
    async def test_query_in_progress(self):
        """Test a second question is refused while one is outstanding."""
        self.client.loading = True

        with pytest.raises(ClientInputError, match="already in progress"):
            await self.client.ask([make_file()], "what is this?")

        assert self.requests == []

    @pytest.mark.asyncio
    async def test_ask(self):
        """Test the prompt and structured metadata are posted together."""
        answer = await self.client.ask([make_file()], "what is this?")

        assert answer == "It says hello."
        assert not self.client.loading
        request = self.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "http://relay.test/api/query"
        body = json.loads(request.content)
        assert body["prompt"] == "Context:\nFile: a.txt\nContent: hello...\n\nQuery:\nwhat is this?"
        assert body["query"] == "what is this?"
        assert body["file"]["name"] == "a.txt"
        assert body["file"]["category"] == "text"

    @pytest.mark.asyncio
    async def test_missing_answer(self):
        """Test a reply without an answer gives the fallback text."""
        self.reply = httpx.Response(200, json={})

        assert await self.client.ask([make_file()], "what is this?") == "No response"

    @pytest.mark.asyncio
    async def test_error_reply(self):
        """Test relay errors are raised with their detail and status."""
        self.reply = httpx.Response(
            429, json={"error": "Failed to get response from AI", "details": "quota"}
        )

        with pytest.raises(BackendError) as exc_info:
            await self.client.ask([make_file()], "what is this?")

        assert exc_info.value.status_code == 429
        assert str(exc_info.value) == "Backend error: quota"
        assert not self.client.loading

    @pytest.mark.asyncio
    async def test_non_json_reply(self):
        """Test a success reply that is not JSON is raised as a backend error."""
        self.reply = httpx.Response(200, text="<html>proxy</html>")

        with pytest.raises(BackendError) as exc_info:
            await self.client.ask([make_file()], "what is this?")

        assert exc_info.value.status_code == 200
        assert str(exc_info.value).startswith("Backend error: Invalid response")

    @pytest.mark.asyncio
    async def test_non_object_reply(self):
        """Test a JSON reply that is not an object is raised as a backend error."""
        self.reply = httpx.Response(200, json=["x"])

        with pytest.raises(BackendError, match="Invalid response body"):
            await self.client.ask([make_file()], "what is this?")

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        """Test connection failures are raised and the loading flag resets."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(BackendError, match="connection refused"):
            await client.ask([make_file()], "what is this?")

        assert not client.loading

    @pytest.mark.asyncio
    async def test_health(self):
        """Test the health payload is returned."""
        self.reply = httpx.Response(200, json={"status": "OK", "message": "Server is running"})

        assert await self.client.health() == {"status": "OK", "message": "Server is running"}
        assert self.requests[0].url.path == "/health"
