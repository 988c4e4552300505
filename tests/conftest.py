"""Shared fixtures: image server and a clean credential environment."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest


@pytest.fixture
def png_bytes() -> bytes:
    return b"\x89PNG\r\n\x1a\nfake-image"


@pytest.fixture
def image_server(png_bytes: bytes) -> Callable[[httpx.Request], httpx.Response]:
    """Serves png_bytes for /cat.png and 404 for everything else."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/cat.png":
            return httpx.Response(200, content=png_bytes)
        return httpx.Response(404)

    return handler


@pytest.fixture(autouse=True)
def clear_api_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests independent of any locally configured credentials."""
    for name in (
        "ANTHROPIC_API_KEY",
        "GOOGLE_API_KEY",
        "XAI_API_KEY",
        "X_API_KEY",
        "OPENAI_API_KEY",
        "OPENROUTER_API_KEY",
        "OPENROUTER_REFERER",
        "OPENROUTER_TITLE",
    ):
        monkeypatch.delenv(name, raising=False)
