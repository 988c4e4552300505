"""Constants and model tables used across chatrelay."""

from __future__ import annotations

from typing import Final

from .services.routing import ModelTable

DEFAULT_TEMPERATURE: Final[float] = 0.7

# Inline reasoning markup emitted by some models behind the aggregator
THINK_OPEN_TAG: Final[str] = "<think>"
THINK_CLOSE_TAG: Final[str] = "</think>"

# Vendor display names, used in error messages and logs
ANTHROPIC: Final[str] = "Claude"
GOOGLE: Final[str] = "Gemini"
XAI: Final[str] = "Grok"
OPENAI: Final[str] = "ChatGPT"
OPENROUTER: Final[str] = "OpenRouter"

XAI_BASE_URL: Final[str] = "https://api.x.ai/v1"
OPENROUTER_URL: Final[str] = "https://openrouter.ai/api/v1/chat/completions"

# Anthropic requires max_tokens > budget_tokens when thinking is enabled
MIN_THINKING_BUDGET: Final[int] = 1024

REASONING_EFFORT: Final[str] = "medium"

CLAUDE_MODELS: Final[ModelTable] = ModelTable(
    standard={
        1: "claude-3-5-sonnet-20241022",
        2: "claude-3-5-haiku-latest",
    },
    reasoning={
        1: "claude-3-7-sonnet-latest",
        2: "claude-sonnet-4-20250514",
    },
    default="claude-3-5-haiku-latest",
    reasoning_default="claude-3-7-sonnet-latest",
)

GEMINI_MODELS: Final[ModelTable] = ModelTable(
    standard={
        1: "gemini-1.5-pro",
        2: "gemini-1.5-flash",
    },
    reasoning={
        1: "gemini-2.0-flash-thinking-exp",
    },
    default="gemini-1.5-flash",
    reasoning_default="gemini-2.0-flash-thinking-exp",
)

GROK_MODELS: Final[ModelTable] = ModelTable(
    standard={
        1: "grok-beta",
    },
    reasoning={
        1: "grok-3-mini",
    },
    default="grok-beta",
    reasoning_default="grok-3-mini",
    vision="grok-vision-beta",
)

CHATGPT_MODELS: Final[ModelTable] = ModelTable(
    standard={
        1: "gpt-4o",
        2: "gpt-4o-mini",
    },
    reasoning={
        1: "o1",
        2: "o3-mini",
    },
    default="gpt-4o-mini",
    reasoning_default="o3-mini",
)
