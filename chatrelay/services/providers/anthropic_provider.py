"""Anthropic provider for Claude models."""

from __future__ import annotations

from typing import Any, AsyncIterable

import anthropic

from ...constants import ANTHROPIC, CLAUDE_MODELS, MIN_THINKING_BUDGET
from ...models import ChatMessage, SystemInstruction, system_blocks
from ..images import encode_image
from ..routing import is_reasoning, resolve_model
from .base import ModelProvider, VendorRequest


def thinking_budget(max_tokens: int) -> int:
    """Half the output budget, never below the vendor minimum."""
    return max(MIN_THINKING_BUDGET, max_tokens // 2)


class AnthropicProvider(ModelProvider):
    """Provider for Anthropic Claude models.

    Images are inlined as base64 blocks ahead of the text block. System-role
    messages in the history are moved into the system prompt. Negative
    selectors enable extended thinking, which streams as ``thinking_delta``;
    max_tokens is raised when it cannot hold the thinking budget.
    """

    name = "anthropic"
    vendor = ANTHROPIC
    models = CLAUDE_MODELS

    async def build_request(
        self,
        messages: list[ChatMessage],
        system: SystemInstruction | None,
        model: int,
        max_tokens: int,
        temperature: float,
    ) -> VendorRequest:
        model_id = resolve_model(self.models, model)

        # The Messages API only takes user/assistant turns
        folded = [m.content for m in messages if m.role == "system" and m.content]
        params: dict[str, Any] = {
            "model": model_id,
            "max_tokens": max_tokens,
            "messages": [await self._to_api_message(m) for m in messages if m.role != "system"],
        }

        # Claude takes the system prompt as a string or as text blocks
        if isinstance(system, str):
            text = "\n\n".join([system, *folded] if system else folded)
            if text:
                params["system"] = text
        else:
            blocks = system_blocks(system) + folded
            if blocks:
                params["system"] = [{"type": "text", "text": text} for text in blocks]

        # Thinking requires the default temperature
        if is_reasoning(model):
            budget = thinking_budget(max_tokens)
            if budget >= max_tokens:
                # budget_tokens must stay below max_tokens
                params["max_tokens"] = budget + max_tokens
            params["thinking"] = {"type": "enabled", "budget_tokens": budget}
        else:
            params["temperature"] = temperature

        return VendorRequest(model=model_id, params=params)

    async def _to_api_message(self, message: ChatMessage) -> dict[str, Any]:
        if not message.images:
            return {"role": message.role, "content": message.content}

        content: list[dict[str, Any]] = []
        for image in message.images:
            content.append(
                {
                    "type": "image",
                    "source": {
                        "type": "base64",
                        "media_type": image.media_type,
                        "data": await encode_image(image, self.vendor, self.http_client),
                    },
                }
            )
        content.append({"type": "text", "text": message.content})
        return {"role": message.role, "content": content}

    def make_client(self, api_key: str) -> anthropic.AsyncAnthropic:
        return anthropic.AsyncAnthropic(api_key=api_key)

    async def open_stream(self, api_key: str, request: VendorRequest) -> AsyncIterable[Any]:
        client = self.make_client(api_key)
        return await client.messages.create(**request.params, stream=True)
