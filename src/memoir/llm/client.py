"""Chat-model clients: OpenAI-compatible HTTP and Anthropic SDK, async."""

from __future__ import annotations

import logging
import os

import httpx

from memoir.exceptions import ExternalServiceError, ModelResponseError, ModelTimeoutError
from memoir.llm.base import BaseChatModel
from memoir.llm.parsing import extract_content

logger = logging.getLogger(__name__)


DEFAULT_MODEL = os.environ.get("MEMOIR_LLM_MODEL", "gpt-3.5-turbo")
DEFAULT_BASE_URL = os.environ.get("OPENAI_BASE_URL", "https://api.openai.com/v1")
DEFAULT_ANTHROPIC_MODEL = os.environ.get("MEMOIR_ANTHROPIC_MODEL", "claude-haiku-4-5-20251001")
DEFAULT_TIMEOUT = float(os.environ.get("MEMOIR_LLM_TIMEOUT", "30"))


class ChatCompletionClient(BaseChatModel):
    """Async client for ``POST {base_url}/chat/completions``.

    Args:
        api_key: Bearer token. Falls back to ``OPENAI_API_KEY``.
        model: Model name sent in every request.
        base_url: API root, for OpenAI-compatible gateways.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport, mainly for tests.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise ExternalServiceError(
                "OpenAI API key is required. "
                "Pass it directly or set OPENAI_API_KEY in your environment."
            )
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
    ) -> str:
        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    "/chat/completions",
                    json=body,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                )
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ModelTimeoutError(
                f"Chat completion timed out after {self.timeout}s"
            ) from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Chat completion request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise ModelResponseError(
                "Chat completion body is not JSON", raw_content=response.text[:2000]
            ) from e
        logger.debug("Chat completion ok (model=%s, status=%s)", self.model, response.status_code)
        return extract_content(payload)


class AnthropicChatClient(BaseChatModel):
    """Async wrapper around the Anthropic SDK with the same contract."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_ANTHROPIC_MODEL,
        timeout: float = DEFAULT_TIMEOUT,
        max_tokens: int = 2048,
    ):
        if not api_key and not os.environ.get("ANTHROPIC_API_KEY"):
            raise ExternalServiceError(
                "Anthropic API key is required. "
                "Pass it directly or set ANTHROPIC_API_KEY in your environment."
            )
        try:
            from anthropic import AsyncAnthropic
        except ImportError:
            raise ImportError(
                "anthropic is required for AnthropicChatClient. "
                "Install with: pip install memoir[anthropic]"
            )
        # Retries are the caller's decision.
        self._client = AsyncAnthropic(api_key=api_key or None, timeout=timeout, max_retries=0)
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens

    @property
    def client(self):
        """Access the underlying AsyncAnthropic SDK client for advanced usage."""
        return self._client

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
    ) -> str:
        from anthropic import APIError, APITimeoutError

        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except APITimeoutError as e:
            raise ModelTimeoutError(f"Claude API timed out after {self.timeout}s") from e
        except APIError as e:
            raise ExternalServiceError(f"Claude API error: {e}") from e

        text_parts = [block.text for block in response.content if block.type == "text"]
        if not text_parts:
            raise ModelResponseError("Claude response has no text content")
        return "\n".join(text_parts).strip()
