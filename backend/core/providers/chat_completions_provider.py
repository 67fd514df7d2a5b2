"""OpenAI-compatible chat completions provider (xAI Grok by default)."""

import logging
from typing import Any, Dict, List, Optional

import httpx
import tiktoken

from backend.config import settings
from backend.core.llm_provider import LLMConfig, LLMProvider, LLMProviderError, LLMResponse

logger = logging.getLogger(__name__)


class ChatCompletionsProvider(LLMProvider):
    """Provider for any API that speaks the ``/chat/completions`` protocol.

    Args:
        model: Chat model name (defaults to LLM_MODEL)
        base_url: API base URL including the version segment (defaults to LLM_BASE_URL)
        api_key: Bearer key sent with every request (defaults to LLM_API_KEY)
        timeout: Request timeout in seconds (defaults to LLM_TIMEOUT)
        tokenizer_model: tiktoken encoding used when the API does not report usage
    """

    def __init__(
        self,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[int] = None,
        tokenizer_model: str = "cl100k_base",
    ) -> None:
        self.model = model or settings.llm_model
        self.base_url = (base_url or settings.llm_base_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.llm_api_key
        self.timeout = timeout or settings.llm_timeout
        self.tokenizer_model = tokenizer_model
        self._tokenizer: Optional[tiktoken.Encoding] = None
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load async HTTP client."""
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            if self.api_key:
                headers["Authorization"] = f"Bearer {self.api_key}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=headers,
            )
        return self._client

    @property
    def tokenizer(self) -> tiktoken.Encoding:
        """Lazy-load tokenizer for token counting."""
        if self._tokenizer is None:
            try:
                self._tokenizer = tiktoken.get_encoding(self.tokenizer_model)
            except (KeyError, ValueError):
                logger.warning(f"Tokenizer encoding {self.tokenizer_model} not found, using cl100k_base")
                self._tokenizer = tiktoken.get_encoding("cl100k_base")
        return self._tokenizer

    def _build_messages(self, prompt: str, system_prompt: Optional[str] = None) -> List[Dict[str, str]]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages

    def _build_request_data(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        config: Optional[LLMConfig] = None,
    ) -> Dict[str, Any]:
        request_data: Dict[str, Any] = {
            "model": self.model,
            "messages": self._build_messages(prompt, system_prompt),
        }
        if config:
            request_data.update(config.to_dict())
        return request_data

    async def generate_async(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        """Send one chat completion request and return the first choice.

        Raises:
            LLMProviderError: If the request fails or the payload has no choices
        """
        self.validate_config(config)
        if not self.api_key:
            raise LLMProviderError("No API key configured for the generation provider")

        request_data = self._build_request_data(prompt, system_prompt, config)

        try:
            response = await self.client.post("/chat/completions", json=request_data)
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Chat completions request returned {e.response.status_code}")
            raise LLMProviderError(f"Provider returned HTTP {e.response.status_code}: {e.response.text}") from e
        except httpx.HTTPError as e:
            logger.error(f"Chat completions request failed: {e}")
            raise LLMProviderError(f"Failed to generate text: {e}") from e
        except ValueError as e:
            logger.error(f"Chat completions response was not JSON: {e}")
            raise LLMProviderError("Provider returned a malformed response") from e

        choices = result.get("choices") or []
        if not choices:
            raise LLMProviderError("Provider returned no choices")
        text = (choices[0].get("message") or {}).get("content") or ""

        usage = result.get("usage") or {}
        prompt_tokens = usage.get("prompt_tokens")
        completion_tokens = usage.get("completion_tokens")
        if prompt_tokens is None or completion_tokens is None:
            prompt_tokens = sum(self.count_tokens(m["content"]) for m in request_data["messages"])
            completion_tokens = self.count_tokens(text)

        return LLMResponse(
            text=text,
            model=result.get("model", self.model),
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
            metadata={
                "id": result.get("id"),
                "finish_reason": choices[0].get("finish_reason"),
            },
        )

    def count_tokens(self, text: str) -> int:
        """Count the number of tokens in a text string.

        Raises:
            LLMProviderError: If token counting fails
        """
        if not text:
            return 0

        try:
            return len(self.tokenizer.encode(text))
        except Exception as e:
            logger.error(f"Token counting failed: {e}")
            raise LLMProviderError(f"Failed to count tokens: {e}") from e

    def get_model_name(self) -> str:
        """Get the name of the model being used."""
        return self.model

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
