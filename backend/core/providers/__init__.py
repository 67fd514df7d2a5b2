"""Text generation providers."""

from typing import AsyncIterator

from backend.core.llm_provider import LLMProvider
from backend.core.providers.chat_completions_provider import ChatCompletionsProvider


async def get_llm_provider() -> AsyncIterator[LLMProvider]:
    """FastAPI dependency yielding the configured generation provider.

    The provider's HTTP client is closed once the request is finished.
    """
    provider = ChatCompletionsProvider()
    try:
        yield provider
    finally:
        await provider.aclose()


__all__ = ["ChatCompletionsProvider", "get_llm_provider"]
