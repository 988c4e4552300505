"""OpenAI provider for ChatGPT models."""

from __future__ import annotations

from typing import Any, AsyncIterable

from openai import AsyncOpenAI

from ...constants import CHATGPT_MODELS, OPENAI, REASONING_EFFORT
from ...models import ChatMessage, SystemInstruction, join_system
from ..routing import is_reasoning, resolve_model
from .base import ModelProvider, VendorRequest


def openai_messages(
    messages: list[ChatMessage],
    system: SystemInstruction | None,
    *,
    include_images: bool = True,
) -> list[dict[str, Any]]:
    """
    Convert chat history to the OpenAI Chat Completions message format.

    The system instruction is joined into one leading system message. Images
    are passed by URL reference, ahead of the text block.
    """
    full_messages: list[dict[str, Any]] = []
    system_prompt = join_system(system)
    if system_prompt:
        full_messages.append({"role": "system", "content": system_prompt})

    for m in messages:
        if include_images and m.images:
            content: list[dict[str, Any]] = [
                {"type": "image_url", "image_url": {"url": image.url, "detail": "high"}}
                for image in m.images
            ]
            content.append({"type": "text", "text": m.content})
            full_messages.append({"role": m.role, "content": content})
        else:
            full_messages.append({"role": m.role, "content": m.content})

    return full_messages


class OpenAIProvider(ModelProvider):
    """Provider for OpenAI GPT models.

    Negative selectors pick a reasoning model and send reasoning_effort
    instead of a temperature.
    """

    name = "openai"
    vendor = OPENAI
    models = CHATGPT_MODELS

    async def build_request(
        self,
        messages: list[ChatMessage],
        system: SystemInstruction | None,
        model: int,
        max_tokens: int,
        temperature: float,
    ) -> VendorRequest:
        model_id = resolve_model(self.models, model)

        params: dict[str, Any] = {
            "model": model_id,
            "messages": openai_messages(messages, system),
            "max_completion_tokens": max_tokens,
        }

        # Reasoning models reject temperature
        if is_reasoning(model):
            params["reasoning_effort"] = REASONING_EFFORT
        else:
            params["temperature"] = temperature

        return VendorRequest(model=model_id, params=params)

    def make_client(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(api_key=api_key)

    async def open_stream(self, api_key: str, request: VendorRequest) -> AsyncIterable[Any]:
        client = self.make_client(api_key)
        return await client.chat.completions.create(**request.params, stream=True)
