"""Pytest fixtures for chat completions provider tests."""

from typing import Any, Dict, Optional

import httpx
import pytest


class MockAsyncResponse:
    """
    Mock response for async POST calls.
    - raise_for_status() raises httpx.HTTPStatusError for 4xx/5xx codes
    - json() returns the configured payload or raises ValueError
    """

    def __init__(self, json_data: Any, status_code: int = 200, text: str = ""):
        self._json_data = json_data
        self.status_code = status_code
        self.text = text

    def raise_for_status(self) -> None:
        """Raise error if the status code is an error."""
        if self.status_code >= 400:
            request = httpx.Request("POST", "https://api.test/v1/chat/completions")
            response = httpx.Response(self.status_code, request=request, text=self.text)
            raise httpx.HTTPStatusError(f"HTTP {self.status_code}", request=request, response=response)

    def json(self) -> Any:
        """Return JSON data."""
        if isinstance(self._json_data, Exception):
            raise self._json_data
        return self._json_data


class MockClient:
    """
    Mock async client exposing .post() like httpx.AsyncClient.
    """

    def __init__(
        self,
        *,
        post_response: Any = None,
        post_error: Optional[Exception] = None,
        status_code: int = 200,
        text: str = "",
    ):
        self.post_response = post_response
        self.post_error = post_error
        self.status_code = status_code
        self.text = text
        self.last_post_args: Optional[tuple] = None  # capture post call args
        self.closed = False

    async def post(self, path: str, **kwargs):
        """Mock async POST method."""
        self.last_post_args = (path, kwargs)

        if self.post_error:
            raise self.post_error

        return MockAsyncResponse(self.post_response or {}, status_code=self.status_code, text=self.text)

    async def aclose(self) -> None:
        """Close the client."""
        self.closed = True


@pytest.fixture
def mock_client_factory():
    """Factory fixture for creating MockClient instances.

    Example:
        ```python
        mock_client = mock_client_factory(
            post_response={"choices": [{"message": {"content": "{}"}}]}
        )
        mock_client = mock_client_factory(post_error=httpx.ConnectError("down"))
        mock_client = mock_client_factory(status_code=429, text="quota exceeded")
        ```
    """

    def _create_mock_client(
        post_response: Any = None,
        post_error: Optional[Exception] = None,
        status_code: int = 200,
        text: str = "",
    ) -> MockClient:
        return MockClient(
            post_response=post_response,
            post_error=post_error,
            status_code=status_code,
            text=text,
        )

    return _create_mock_client


@pytest.fixture
def completion_payload() -> Dict[str, Any]:
    """A typical chat completions response body."""
    return {
        "id": "chatcmpl-123",
        "model": "grok-3-mini-fast",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": '{"name": "x"}'},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 42, "completion_tokens": 7, "total_tokens": 49},
    }
