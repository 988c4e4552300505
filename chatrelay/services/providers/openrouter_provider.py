"""OpenRouter provider: raw streaming HTTP to the aggregator route."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, AsyncIterator

import httpx

from ...config import openrouter_headers
from ...constants import OPENROUTER, OPENROUTER_URL
from ...errors import ProviderCallError
from ...models import ChatMessage, RouterModel, SystemInstruction
from ..sse import iter_event_stream
from .base import ModelProvider, VendorRequest
from .openai_provider import openai_messages

logger = logging.getLogger(__name__)


def coerce_router_model(model: RouterModel | Mapping | str) -> RouterModel:
    """Accept a RouterModel, a {name, reasoning_enabled} mapping or a bare name."""
    if isinstance(model, RouterModel):
        return model
    if isinstance(model, str):
        return RouterModel(name=model)
    return RouterModel.model_validate(model)


class EventStreamReader:
    """Parsed chunks of one streaming response; closing releases the connection."""

    def __init__(self, response: httpx.Response, client: httpx.AsyncClient | None = None) -> None:
        self.response = response
        self._client = client  # owned client, closed with the response
        self._chunks: AsyncIterator[Any] | None = None

    def __aiter__(self) -> AsyncIterator[Any]:
        if self._chunks is None:
            self._chunks = iter_event_stream(self.response.aiter_bytes())
        return self._chunks

    async def aclose(self) -> None:
        if self._chunks is not None:
            await self._chunks.aclose()
        await self.response.aclose()
        if self._client is not None:
            await self._client.aclose()


class OpenRouterProvider(ModelProvider):
    """Provider for models behind the OpenRouter aggregator.

    Bypasses vendor SDKs: the event stream is parsed here. Upstream models
    that inline reasoning as ``<think>`` markup in the content field are
    split by the tag-balance heuristic; native ``reasoning`` fields pass
    through as reasoning.
    """

    name = "openrouter"
    vendor = OPENROUTER
    inline_reasoning = True

    async def build_request(
        self,
        messages: list[ChatMessage],
        system: SystemInstruction | None,
        model: RouterModel | Mapping | str,
        max_tokens: int,
        temperature: float,
    ) -> VendorRequest:
        selector = coerce_router_model(model)
        params = {
            "model": selector.name,
            "messages": openai_messages(messages, system),
            "temperature": temperature,
            "max_tokens": max_tokens,
            "stream": True,
            "include_reasoning": selector.reasoning_enabled,
        }
        return VendorRequest(model=selector.name, params=params)

    async def open_stream(self, api_key: str, request: VendorRequest) -> EventStreamReader:
        owned = self.http_client is None
        client = httpx.AsyncClient(timeout=None) if owned else self.http_client
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            **openrouter_headers(),
        }

        try:
            response = await client.send(
                client.build_request("POST", OPENROUTER_URL, json=request.params, headers=headers),
                stream=True,
            )
        except BaseException:
            if owned:
                await client.aclose()
            raise

        if response.is_error:
            try:
                await response.aread()
            finally:
                await response.aclose()
                if owned:
                    await client.aclose()
            logger.warning(
                f"OpenRouter API call failed with status {response.status_code}: {response.text[:200]}"
            )
            raise ProviderCallError(
                self.vendor, f"OpenRouter API call failed with status {response.status_code}"
            )

        logger.info("OpenRouter API call successful, returning adapted stream")
        return EventStreamReader(response, client if owned else None)
