"""Base classes for model providers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx

from ...config import resolve_api_key
from ...constants import DEFAULT_TEMPERATURE
from ...errors import ChatRelayError, ProviderCallError
from ...models import ChatMessage, SystemInstruction, coerce_messages
from ..normalizer import EventStream, normalize_stream

logger = logging.getLogger(__name__)


@dataclass
class VendorRequest:
    """A fully built vendor request: the concrete model and the call parameters."""

    model: str
    params: dict[str, Any] = field(default_factory=dict)


class ModelProvider(ABC):
    """Base class for all model providers.

    Each provider is a thin wrapper around one vendor API: it builds the
    vendor request, opens the vendor stream and hands it to the normalizer.
    Retries, rate limiting and caching are left to the caller.
    """

    name: str  # registry key, e.g. "anthropic"
    vendor: str  # display name used in errors, e.g. "Claude"
    inline_reasoning: bool = False

    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        # Shared client for image fetches and raw HTTP calls; None = per call
        self.http_client = http_client

    async def call(
        self,
        api_key: str | None,
        messages: Sequence[ChatMessage | Mapping],
        system: SystemInstruction | None = None,
        model: Any = 1,
        max_tokens: int = 4096,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> EventStream:
        """Issue a streaming call and return its canonical event stream.

        Args:
            api_key: Vendor api key; None falls back to the environment
            messages: Chat history, ChatMessage instances or plain dicts
            system: System instruction, a string or a sequence of {text} blocks
            model: Model selector (signed int; RouterModel for the aggregator)
            max_tokens: Output token limit
            temperature: Sampling temperature

        Raises:
            ProviderCallError: If the request cannot be built or the vendor
                rejects the call. Raised before any stream is returned.
        """
        key = resolve_api_key(self.name, self.vendor, api_key)

        try:
            chat = coerce_messages(messages)
            request = await self.build_request(chat, system, model, max_tokens, temperature)
            logger.info(f"Making {self.vendor} API call with model: {request.model}")
            raw = await self.open_stream(key, request)
        except ChatRelayError:
            raise
        except Exception as e:
            logger.error(f"{self.vendor} API call failed: {e}")
            raise ProviderCallError(self.vendor, str(e)) from e

        return normalize_stream(
            raw,
            self.vendor,
            inline_reasoning=self.inline_reasoning,
            model=request.model,
        )

    @abstractmethod
    async def build_request(
        self,
        messages: list[ChatMessage],
        system: SystemInstruction | None,
        model: Any,
        max_tokens: int,
        temperature: float,
    ) -> VendorRequest:
        """Translate canonical inputs into the vendor request shape."""

    @abstractmethod
    async def open_stream(self, api_key: str, request: VendorRequest) -> AsyncIterable[Any]:
        """Issue the request in streaming mode and return the raw vendor stream."""


class ProviderRegistry:
    """Registry to map vendor names to provider instances."""

    _providers: dict[str, ModelProvider] = {}

    @classmethod
    def register(cls, provider: ModelProvider) -> None:
        """Register a provider under its name."""
        cls._providers[provider.name] = provider

    @classmethod
    def get(cls, name: str) -> ModelProvider:
        """Get provider by name.

        Raises:
            ValueError: If name is not registered
        """
        if name not in cls._providers:
            available = ", ".join(cls._providers.keys()) or "none"
            raise ValueError(f"Unknown provider: {name}. Available: {available}")
        return cls._providers[name]

    @classmethod
    def list_providers(cls) -> list[str]:
        """List all registered provider names."""
        return list(cls._providers.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registered providers (for testing)."""
        cls._providers.clear()
