"""Canonical chat inputs: messages, images, system instructions and router selectors."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ImageRef(BaseModel):
    """An image attached to a chat message (http(s) URL, data URI or local path)."""

    model_config = ConfigDict(frozen=True)

    media_type: str
    url: str


class ChatMessage(BaseModel):
    """A single chat message in the caller's history."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    role: Literal["system", "user", "assistant"]
    content: str = ""
    images: Optional[tuple[ImageRef, ...]] = Field(default=None, alias="image")

    @property
    def has_images(self) -> bool:
        return bool(self.images)


class SystemBlock(BaseModel):
    """One labeled text block of a multi-part system instruction."""

    model_config = ConfigDict(frozen=True)

    text: str


class RouterModel(BaseModel):
    """Model selector for the aggregator route."""

    model_config = ConfigDict(frozen=True)

    name: str
    reasoning_enabled: bool = False


SystemInstruction = Union[str, Sequence[Union[SystemBlock, Mapping[str, str]]]]


def coerce_messages(
    messages: Sequence[ChatMessage | Mapping],
) -> list[ChatMessage]:
    """Accept ChatMessage instances or plain dicts with role/content/image."""
    return [
        m if isinstance(m, ChatMessage) else ChatMessage.model_validate(m)
        for m in messages
    ]


def system_blocks(system: SystemInstruction | None) -> list[str]:
    """Flatten a system instruction into its ordered text blocks."""
    if system is None:
        return []
    if isinstance(system, str):
        return [system]
    blocks = []
    for block in system:
        if isinstance(block, SystemBlock):
            blocks.append(block.text)
        else:
            blocks.append(SystemBlock.model_validate(block).text)
    return blocks


def join_system(system: SystemInstruction | None) -> str:
    """Join a system instruction into a single string with blank-line separators."""
    return "\n\n".join(system_blocks(system))
