"""Stream normalization: vendor chunks in, canonical events out.

Every provider hands its raw vendor stream to :func:`normalize_stream`. Chunks
are accepted as mappings or SDK objects in three shapes:

- OpenAI-compatible: ``choices[0].delta.content`` with optional
  ``reasoning_content`` / ``reasoning`` (OpenAI, xAI, OpenRouter)
- Anthropic events: ``type == "content_block_delta"`` with ``delta.text`` or
  ``delta.thinking``
- Gemini responses: ``candidates[0].content.parts`` (parts flagged
  ``thought`` are reasoning) or a bare ``text``

When a vendor inlines reasoning as ``<think>...</think>`` inside the content
field, content fragments go through a tag-balance heuristic instead (see
:func:`classify_fragment`).
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import AsyncIterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..constants import THINK_CLOSE_TAG, THINK_OPEN_TAG
from ..errors import ChatRelayError, StreamProcessingError
from .events import CanonicalEvent, ContentDelta, ReasoningDelta

logger = logging.getLogger(__name__)


@dataclass
class NormalizerState:
    """Per-stream classification state.

    ``visible`` holds every fragment emitted on the content channel. Tag
    counting runs over every fragment seen by the heuristic; only the last
    few characters are kept (``tail``) so tags split across fragments are
    still counted once.
    """

    open_tag: str = THINK_OPEN_TAG
    close_tag: str = THINK_CLOSE_TAG
    visible: list[str] = field(default_factory=list)
    open_count: int = 0
    close_count: int = 0
    tail: str = ""

    @property
    def visible_text(self) -> str:
        return "".join(self.visible)

    def tally(self, fragment: str) -> None:
        """Count tag occurrences that end inside ``fragment``."""
        window = self.tail + fragment
        self.open_count += window.count(self.open_tag) - self.tail.count(self.open_tag)
        self.close_count += window.count(self.close_tag) - self.tail.count(self.close_tag)
        keep = max(len(self.open_tag), len(self.close_tag)) - 1
        self.tail = window[-keep:] if keep else ""


def classify_fragment(state: NormalizerState, fragment: str) -> CanonicalEvent:
    """
    Classify one inline content fragment as reasoning or visible text.

    A fragment is reasoning when, counting every fragment so far including
    this one, an open tag is still pending, or when the close count moved
    with this fragment (it completes or straddles a closing tag).
    """
    previous_close = state.close_count
    state.tally(fragment)

    if state.open_count > state.close_count or state.close_count != previous_close:
        return ReasoningDelta(fragment)

    state.visible.append(fragment)
    return ContentDelta(fragment)


def _get(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _gemini_deltas(candidate: Any) -> tuple[str | None, str | None]:
    parts = _get(_get(candidate, "content"), "parts") or []
    thoughts: list[str] = []
    texts: list[str] = []
    for part in parts:
        text = _get(part, "text")
        if not text:
            continue
        (thoughts if _get(part, "thought") else texts).append(text)
    return "".join(thoughts) or None, "".join(texts) or None


def extract_deltas(chunk: Any) -> tuple[str | None, str | None]:
    """Return ``(reasoning, content)`` carried by a vendor chunk."""
    error = _get(chunk, "error")
    if error or _get(chunk, "type") == "error":
        message = _get(error, "message") or str(error or chunk)
        raise StreamProcessingError("vendor", message)

    if _get(chunk, "type") == "content_block_delta":
        delta = _get(chunk, "delta")
        return _get(delta, "thinking"), _get(delta, "text")

    choices = _get(chunk, "choices")
    if choices:
        delta = _get(choices[0], "delta")
        reasoning = _get(delta, "reasoning_content") or _get(delta, "reasoning")
        return reasoning, _get(delta, "content")

    candidates = _get(chunk, "candidates")
    if candidates:
        return _gemini_deltas(candidates[0])

    return None, _get(chunk, "text")


def normalize_chunk(
    chunk: Any,
    state: NormalizerState,
    *,
    inline_reasoning: bool = False,
) -> Iterator[CanonicalEvent]:
    """Yield the canonical events for one vendor chunk, in order."""
    reasoning, content = extract_deltas(chunk)

    if reasoning:
        yield ReasoningDelta(reasoning)

    if not content:
        return

    if inline_reasoning and not reasoning:
        yield classify_fragment(state, content)
    else:
        state.visible.append(content)
        yield ContentDelta(content)


class EventStream:
    """Async iterator of canonical events over one raw vendor stream.

    Single pass. The raw stream is released once: on exhaustion, on error,
    or when :meth:`aclose` is called (also via ``async with``). Callers that
    may stop iterating early should use ``async with`` or call ``aclose``.
    """

    def __init__(
        self,
        raw: AsyncIterable[Any],
        vendor: str,
        *,
        inline_reasoning: bool = False,
        model: str | None = None,
    ) -> None:
        self.vendor = vendor
        self.model = model
        self.inline_reasoning = inline_reasoning
        self.state = NormalizerState()
        self._raw = raw
        self._released = False
        self._events = self._normalize()

    @property
    def visible_text(self) -> str:
        """All content-channel text emitted so far."""
        return self.state.visible_text

    def __aiter__(self) -> EventStream:
        return self

    async def __anext__(self) -> CanonicalEvent:
        return await self._events.__anext__()

    async def __aenter__(self) -> EventStream:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Stop iteration and release the underlying vendor stream."""
        await self._events.aclose()
        await self._release()

    async def _normalize(self):
        try:
            async for chunk in self._raw:
                for event in normalize_chunk(
                    chunk, self.state, inline_reasoning=self.inline_reasoning
                ):
                    yield event
        except StreamProcessingError as e:
            logger.error(f"{self.vendor} stream reported an error: {e.message}")
            raise StreamProcessingError(self.vendor, e.message) from e
        except ChatRelayError:
            raise
        except Exception as e:
            logger.error(f"{self.vendor} streaming error: {e}")
            raise StreamProcessingError(self.vendor, str(e)) from e
        finally:
            await self._release()

    async def _release(self) -> None:
        if self._released:
            return
        self._released = True
        for closer_name in ("aclose", "close"):
            closer = getattr(self._raw, closer_name, None)
            if closer is not None and callable(closer):
                result = closer()
                if inspect.isawaitable(result):
                    await result
                return


def normalize_stream(
    raw: AsyncIterable[Any],
    vendor: str,
    *,
    inline_reasoning: bool = False,
    model: str | None = None,
) -> EventStream:
    """Wrap a raw vendor stream in a canonical :class:`EventStream`."""
    return EventStream(raw, vendor, inline_reasoning=inline_reasoning, model=model)
