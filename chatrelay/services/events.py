"""Canonical streaming events shared by every provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class ContentDelta:
    """Visible answer fragment."""

    text: str
    type: ClassVar[str] = "content_block_delta"

    def to_dict(self) -> dict:
        return {"type": self.type, "delta": {"text": self.text}}


@dataclass(frozen=True)
class ReasoningDelta:
    """Reasoning/thinking fragment, kept apart from the answer channel."""

    text: str
    type: ClassVar[str] = "reasoning_content"

    def to_dict(self) -> dict:
        return {"type": self.type, "reasoning_content": self.text}


CanonicalEvent = Union[ContentDelta, ReasoningDelta]
