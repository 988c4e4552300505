"""Environment-driven configuration for provider credentials and headers."""

from __future__ import annotations

import logging
import os
from typing import Final

from dotenv import load_dotenv

from .errors import ProviderCallError

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Environment variables consulted when a call passes api_key=None, in order
API_KEY_ENV: Final[dict[str, tuple[str, ...]]] = {
    "anthropic": ("ANTHROPIC_API_KEY",),
    "google": ("GOOGLE_API_KEY",),
    "xai": ("XAI_API_KEY", "X_API_KEY"),
    "openai": ("OPENAI_API_KEY",),
    "openrouter": ("OPENROUTER_API_KEY",),
}


def resolve_api_key(provider: str, vendor: str, api_key: str | None) -> str:
    """
    Return the explicit api key, or fall back to the provider's env variable.

    Raises:
        ProviderCallError: If no key is passed and none is configured
    """
    if api_key:
        return api_key

    names = API_KEY_ENV.get(provider, ())
    for name in names:
        value = os.getenv(name)
        if value:
            return value

    expected = " or ".join(names) or "an api key"
    logger.warning(f"{expected} not set")
    raise ProviderCallError(vendor, f"No API key provided; set {expected}")


def openrouter_headers() -> dict[str, str]:
    """Optional attribution headers sent to OpenRouter."""
    headers = {}
    referer = os.getenv("OPENROUTER_REFERER")
    if referer:
        headers["HTTP-Referer"] = referer
    title = os.getenv("OPENROUTER_TITLE")
    if title:
        headers["X-Title"] = title
    return headers
