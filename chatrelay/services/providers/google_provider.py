"""Google provider for Gemini models."""

from __future__ import annotations

from typing import Any, AsyncIterable

from ...constants import GEMINI_MODELS, GOOGLE
from ...models import ChatMessage, SystemInstruction, system_blocks
from ..images import read_image
from ..routing import is_reasoning, resolve_model
from .base import ModelProvider, VendorRequest

# Gemini only knows "user" and "model"
ROLE_MAP = {"assistant": "model", "user": "user"}


class GoogleProvider(ModelProvider):
    """Provider for Google Gemini models.

    Images are fetched and sent as inline data after the text part.
    System-role messages in the history are folded into the system
    instruction. Negative selectors pick a thinking model and request thought
    summaries, which stream as parts flagged ``thought``.
    """

    name = "google"
    vendor = GOOGLE
    models = GEMINI_MODELS

    async def build_request(
        self,
        messages: list[ChatMessage],
        system: SystemInstruction | None,
        model: int,
        max_tokens: int,
        temperature: float,
    ) -> VendorRequest:
        model_id = resolve_model(self.models, model)

        instruction = system_blocks(system)
        contents: list[dict[str, Any]] = []
        for m in messages:
            if m.role == "system":
                instruction.append(m.content)
                continue
            contents.append({"role": ROLE_MAP[m.role], "parts": await self._to_parts(m)})

        config: dict[str, Any] = {
            "max_output_tokens": max_tokens,
            "temperature": temperature,
        }
        if instruction:
            config["system_instruction"] = "\n\n".join(instruction)
        if is_reasoning(model):
            config["thinking_config"] = {"include_thoughts": True}

        return VendorRequest(
            model=model_id,
            params={"model": model_id, "contents": contents, "config": config},
        )

    async def _to_parts(self, message: ChatMessage) -> list[dict[str, Any]]:
        parts: list[dict[str, Any]] = [{"text": message.content}]
        for image in message.images or ():
            data = await read_image(image, self.vendor, self.http_client)
            # The SDK base64-encodes inline bytes on the wire
            parts.append({"inline_data": {"mime_type": image.media_type, "data": data}})
        return parts

    def make_client(self, api_key: str):
        from google import genai

        return genai.Client(api_key=api_key)

    async def open_stream(self, api_key: str, request: VendorRequest) -> AsyncIterable[Any]:
        client = self.make_client(api_key)
        return await client.aio.models.generate_content_stream(**request.params)
