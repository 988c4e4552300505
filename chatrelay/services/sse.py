"""Line-oriented ``data:`` event-stream parsing for the aggregator route."""

from __future__ import annotations

import codecs
import json
import logging
from collections.abc import AsyncIterable, AsyncIterator
from typing import Any

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


def parse_data_line(line: str) -> tuple[bool, Any]:
    """
    Parse a single event-stream line.

    Returns:
        Tuple of (done, payload). ``payload`` is None for lines that carry no
        chunk: blank lines, non-``data:`` lines and malformed JSON.
    """
    line = line.strip()
    if not line.startswith(DATA_PREFIX):
        return False, None

    data = line[len(DATA_PREFIX):]
    if data == DONE_SENTINEL:
        return True, None

    try:
        return False, json.loads(data)
    except json.JSONDecodeError as e:
        logger.warning(f"Skipping malformed event-stream line: {e}")
        return False, None


async def iter_event_stream(
    chunks: AsyncIterable[bytes | str],
) -> AsyncIterator[Any]:
    """
    Yield parsed JSON payloads from a stream of raw body chunks.

    Chunks may split lines (and multi-byte characters) anywhere. Iteration
    stops at the ``[DONE]`` sentinel or when the body ends.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    buffer = ""

    async for chunk in chunks:
        if isinstance(chunk, bytes):
            buffer += decoder.decode(chunk)
        else:
            buffer += chunk

        while "\n" in buffer:
            line, buffer = buffer.split("\n", 1)
            done, payload = parse_data_line(line)
            if done:
                return
            if payload is not None:
                yield payload

    buffer += decoder.decode(b"", final=True)
    if buffer:
        done, payload = parse_data_line(buffer)
        if not done and payload is not None:
            yield payload
