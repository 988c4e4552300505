"""Model selection from a signed selector and features of the chat history."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ..models import ChatMessage


@dataclass(frozen=True)
class ModelTable:
    """Per-vendor lookup of concrete model identifiers.

    ``standard`` and ``reasoning`` are keyed by the selector magnitude. A
    ``vision`` model, when set, replaces the lookup whenever the history
    carries an image.
    """

    standard: Mapping[int, str]
    default: str
    reasoning: Mapping[int, str] = field(default_factory=dict)
    reasoning_default: str | None = None
    vision: str | None = None


def is_reasoning(selector: int) -> bool:
    """Negative selectors request the reasoning/thinking variant."""
    return selector < 0


def has_images(messages: Sequence[ChatMessage]) -> bool:
    """True when at least one message anywhere in the history carries an image."""
    return any(message.has_images for message in messages)


def resolve_model(table: ModelTable, selector: int, *, with_images: bool = False) -> str:
    """
    Map a signed selector to a model identifier.

    Unmapped magnitudes fall back to the table default for the requested
    mode rather than failing.
    """
    if with_images and table.vision:
        return table.vision

    magnitude = abs(selector)
    if is_reasoning(selector):
        fallback = table.reasoning_default or table.default
        return table.reasoning.get(magnitude, fallback)
    return table.standard.get(magnitude, table.default)
