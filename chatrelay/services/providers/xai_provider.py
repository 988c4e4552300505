"""xAI provider for Grok models."""

from __future__ import annotations

import logging
from typing import Any, AsyncIterable

from openai import AsyncOpenAI

from ...constants import GROK_MODELS, XAI, XAI_BASE_URL
from ...models import ChatMessage, SystemInstruction
from ..routing import has_images, is_reasoning, resolve_model
from .base import ModelProvider, VendorRequest
from .openai_provider import openai_messages

logger = logging.getLogger(__name__)


class XAIProvider(ModelProvider):
    """Provider for xAI Grok models.

    Uses OpenAI-compatible API at api.x.ai. The vision model is picked
    whenever any message in the history carries an image, regardless of the
    selector. The reasoning model streams ``reasoning_content`` natively.
    """

    name = "xai"
    vendor = XAI
    models = GROK_MODELS

    # Grok reasoning models accept "low" or "high"
    REASONING_EFFORT = "high"

    async def build_request(
        self,
        messages: list[ChatMessage],
        system: SystemInstruction | None,
        model: int,
        max_tokens: int,
        temperature: float,
    ) -> VendorRequest:
        vision = has_images(messages)
        model_id = resolve_model(self.models, model, with_images=vision)
        if vision:
            logger.info(f"Image input detected, routing Grok call to {model_id}")

        params: dict[str, Any] = {
            "model": model_id,
            "messages": openai_messages(messages, system, include_images=vision),
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if is_reasoning(model) and not vision:
            params["reasoning_effort"] = self.REASONING_EFFORT

        return VendorRequest(model=model_id, params=params)

    def make_client(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(api_key=api_key, base_url=XAI_BASE_URL)

    async def open_stream(self, api_key: str, request: VendorRequest) -> AsyncIterable[Any]:
        client = self.make_client(api_key)
        return await client.chat.completions.create(**request.params, stream=True)
