"""
Image fetching and base64 encoding for vendors that require inline data.

Remote images (http/https) are downloaded with httpx, ``data:`` URIs are
decoded in place, and anything else is read as a local file path.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from pathlib import Path
from urllib.parse import unquote_to_bytes, urlparse

import httpx

from ..errors import ImageFetchError
from ..models import ImageRef

logger = logging.getLogger(__name__)


def is_remote(url: str) -> bool:
    return urlparse(url).scheme in ("http", "https")


def is_data_uri(url: str) -> bool:
    return url[:5].lower() == "data:"


def decode_data_uri(url: str) -> bytes:
    """
    Decode a ``data:[<mime>][;base64],<payload>`` URI.

    Raises:
        ValueError: If the URI has no payload separator or bad base64
    """
    header, sep, payload = url[5:].partition(",")
    if not sep:
        raise ValueError(f"Malformed data URI: {url[:40]}")
    if header.lower().endswith(";base64"):
        return base64.b64decode(payload, validate=True)
    return unquote_to_bytes(payload)


async def fetch_image_bytes(url: str, client: httpx.AsyncClient | None = None) -> bytes:
    """
    Fetch image bytes from an http(s) URL, a data URI or a local path.

    Raises:
        httpx.HTTPError: On transport failure or non-success status
        OSError: If a local file cannot be read
        ValueError: If a data URI cannot be decoded
    """
    if is_data_uri(url):
        return decode_data_uri(url)

    if not is_remote(url):
        return await asyncio.to_thread(Path(url).read_bytes)

    if client is not None:
        response = await client.get(url)
        response.raise_for_status()
        return response.content

    async with httpx.AsyncClient(follow_redirects=True) as owned:
        response = await owned.get(url)
        response.raise_for_status()
        return response.content


async def read_image(
    image: ImageRef,
    vendor: str,
    client: httpx.AsyncClient | None = None,
) -> bytes:
    """
    Return the raw image bytes.

    Raises:
        ImageFetchError: If the image cannot be fetched; the call is aborted
            before any vendor request is sent
    """
    try:
        return await fetch_image_bytes(image.url, client)
    except (httpx.HTTPError, OSError, ValueError) as e:
        logger.error(f"Failed to fetch image {image.url[:80]}: {e}")
        raise ImageFetchError(vendor, f"Image Fetch Error: {e}") from e


async def encode_image(
    image: ImageRef,
    vendor: str,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Return the image as a base64 string."""
    data = await read_image(image, vendor, client)
    return base64.b64encode(data).decode("ascii")
