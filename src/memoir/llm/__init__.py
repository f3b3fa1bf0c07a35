"""Chat-model clients (OpenAI-compatible HTTP, Anthropic)."""

from memoir.llm.base import BaseChatModel
from memoir.llm.client import (
    DEFAULT_MODEL,
    AnthropicChatClient,
    ChatCompletionClient,
)

__all__ = ["DEFAULT_MODEL", "BaseChatModel", "ChatCompletionClient", "AnthropicChatClient"]
