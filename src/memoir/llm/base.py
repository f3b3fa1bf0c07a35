"""Abstract base class for chat-model backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseChatModel(ABC):
    """Abstract interface for a single-turn chat completion."""

    model: str

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
    ) -> str:
        """Send one system + user exchange and return the raw reply text."""
        ...
