"""One streaming call shape over several chat-completion vendors.

Each vendor's incremental response is normalized into canonical
``ContentDelta`` / ``ReasoningDelta`` events. Retries, rate limiting,
caching and backpressure are the caller's responsibility.
"""

from .errors import ChatRelayError, ImageFetchError, ProviderCallError, StreamProcessingError
from .models import ChatMessage, ImageRef, RouterModel, SystemBlock
from .services import ContentDelta, EventStream, ReasoningDelta, normalize_stream
from .services.providers import (
    ProviderRegistry,
    make_chatgpt_call,
    make_claude_call,
    make_gemini_call,
    make_grok_call,
    make_openrouter_call,
    register_default_providers,
)

__all__ = [
    "ChatMessage",
    "ChatRelayError",
    "ContentDelta",
    "EventStream",
    "ImageFetchError",
    "ImageRef",
    "ProviderCallError",
    "ProviderRegistry",
    "ReasoningDelta",
    "RouterModel",
    "StreamProcessingError",
    "SystemBlock",
    "make_chatgpt_call",
    "make_claude_call",
    "make_gemini_call",
    "make_grok_call",
    "make_openrouter_call",
    "normalize_stream",
    "register_default_providers",
]

__version__ = "1.0.0"
