"""Model provider adapters for multi-vendor support.

This module provides thin wrappers around LLM APIs (Anthropic, Google, xAI,
OpenAI, OpenRouter) with a unified call shape, streaming normalization, and
error wrapping.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ...constants import DEFAULT_TEMPERATURE
from ...models import ChatMessage, SystemInstruction
from ..normalizer import EventStream
from .anthropic_provider import AnthropicProvider
from .base import ModelProvider, ProviderRegistry, VendorRequest
from .google_provider import GoogleProvider
from .openai_provider import OpenAIProvider
from .openrouter_provider import OpenRouterProvider
from .xai_provider import XAIProvider

__all__ = [
    # Base classes
    "ModelProvider",
    "ProviderRegistry",
    "VendorRequest",
    # Providers
    "AnthropicProvider",
    "GoogleProvider",
    "OpenAIProvider",
    "OpenRouterProvider",
    "XAIProvider",
    # Calls
    "make_chatgpt_call",
    "make_claude_call",
    "make_gemini_call",
    "make_grok_call",
    "make_openrouter_call",
    "register_default_providers",
]


def register_default_providers() -> None:
    """Register one instance of every provider under its vendor name."""
    ProviderRegistry.register(AnthropicProvider())
    ProviderRegistry.register(GoogleProvider())
    ProviderRegistry.register(XAIProvider())
    ProviderRegistry.register(OpenAIProvider())
    ProviderRegistry.register(OpenRouterProvider())


async def make_claude_call(
    api_key: str | None,
    chat_context: Sequence[ChatMessage | Mapping],
    system: SystemInstruction | None,
    model: int,
    max_tokens: int,
    temperature: float = DEFAULT_TEMPERATURE,
) -> EventStream:
    return await AnthropicProvider().call(
        api_key, chat_context, system, model, max_tokens, temperature
    )


async def make_gemini_call(
    api_key: str | None,
    chat_context: Sequence[ChatMessage | Mapping],
    system: SystemInstruction | None,
    model: int,
    max_tokens: int,
    temperature: float = DEFAULT_TEMPERATURE,
) -> EventStream:
    return await GoogleProvider().call(
        api_key, chat_context, system, model, max_tokens, temperature
    )


async def make_grok_call(
    api_key: str | None,
    chat_context: Sequence[ChatMessage | Mapping],
    system: SystemInstruction | None,
    model: int,
    max_tokens: int,
    temperature: float = DEFAULT_TEMPERATURE,
) -> EventStream:
    return await XAIProvider().call(
        api_key, chat_context, system, model, max_tokens, temperature
    )


async def make_chatgpt_call(
    api_key: str | None,
    chat_context: Sequence[ChatMessage | Mapping],
    system: SystemInstruction | None,
    model: int,
    max_tokens: int,
    temperature: float = DEFAULT_TEMPERATURE,
) -> EventStream:
    return await OpenAIProvider().call(
        api_key, chat_context, system, model, max_tokens, temperature
    )


async def make_openrouter_call(
    api_key: str | None,
    chat_context: Sequence[ChatMessage | Mapping],
    system: SystemInstruction | None,
    model: Any,
    max_tokens: int,
    temperature: float = DEFAULT_TEMPERATURE,
) -> EventStream:
    """The returned stream's ``model`` attribute holds the routed model name."""
    return await OpenRouterProvider().call(
        api_key, chat_context, system, model, max_tokens, temperature
    )
