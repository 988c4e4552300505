"""Tests for model selection and the canonical message model."""

import pytest
from pydantic import ValidationError

from chatrelay.constants import CHATGPT_MODELS, CLAUDE_MODELS, GEMINI_MODELS, GROK_MODELS
from chatrelay.models import (
    ChatMessage,
    ImageRef,
    SystemBlock,
    coerce_messages,
    join_system,
    system_blocks,
)
from chatrelay.services.routing import ModelTable, has_images, is_reasoning, resolve_model

TABLE = ModelTable(
    standard={1: "big", 2: "small"},
    reasoning={1: "big-thinking"},
    default="small",
    reasoning_default="big-thinking",
)


class TestResolveModel:
    """Signed selector lookup."""

    def test_positive_selector(self):
        assert resolve_model(TABLE, 1) == "big"
        assert resolve_model(TABLE, 2) == "small"

    def test_negative_selector_picks_reasoning_variant(self):
        assert is_reasoning(-1)
        assert resolve_model(TABLE, -1) == "big-thinking"

    def test_unmapped_magnitude_falls_back(self):
        assert resolve_model(TABLE, 9) == "small"
        assert resolve_model(TABLE, -9) == "big-thinking"

    def test_reasoning_default_falls_back_to_default(self):
        table = ModelTable(standard={1: "only"}, default="only")
        assert resolve_model(table, -1) == "only"

    def test_vision_override_only_with_images(self):
        assert resolve_model(GROK_MODELS, 1) == "grok-beta"
        assert resolve_model(GROK_MODELS, 1, with_images=True) == "grok-vision-beta"
        assert resolve_model(GROK_MODELS, -1, with_images=True) == "grok-vision-beta"
        assert resolve_model(TABLE, 1, with_images=True) == "big"

    def test_vendor_tables(self):
        assert resolve_model(CLAUDE_MODELS, 1) == "claude-3-5-sonnet-20241022"
        assert resolve_model(CLAUDE_MODELS, 2) == "claude-3-5-haiku-latest"
        assert resolve_model(GEMINI_MODELS, 1) == "gemini-1.5-pro"
        assert resolve_model(GEMINI_MODELS, 3) == "gemini-1.5-flash"
        assert resolve_model(CHATGPT_MODELS, 1) == "gpt-4o"
        assert resolve_model(CHATGPT_MODELS, -2) == "o3-mini"


class TestImagePresence:
    """The image predicate used for vendor-specific routing."""

    def test_any_message_with_image(self):
        messages = [
            ChatMessage(role="user", content="look", images=[ImageRef(media_type="image/png", url="a.png")]),
            ChatMessage(role="assistant", content="ok"),
        ]
        assert has_images(messages)

    def test_empty_image_list_does_not_count(self):
        assert not has_images([ChatMessage(role="user", content="hi", images=[])])
        assert not has_images([])


class TestChatMessage:
    """Canonical message parsing."""

    def test_image_alias_from_dict(self):
        message = ChatMessage.model_validate(
            {"role": "user", "content": "x", "image": [{"media_type": "image/jpeg", "url": "u"}]}
        )
        assert message.images == (ImageRef(media_type="image/jpeg", url="u"),)

    def test_null_image_means_no_images(self):
        message = ChatMessage.model_validate({"role": "user", "content": "x", "image": None})
        assert message.images is None
        assert not message.has_images

    def test_messages_are_immutable(self):
        message = ChatMessage(role="user", content="x")
        with pytest.raises(ValidationError):
            message.content = "y"

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            ChatMessage(role="tool", content="x")

    def test_coerce_mixed_inputs(self):
        existing = ChatMessage(role="assistant", content="a")
        coerced = coerce_messages([{"role": "user", "content": "q"}, existing])
        assert coerced[0] == ChatMessage(role="user", content="q")
        assert coerced[1] is existing


class TestSystemInstruction:
    """String and block forms of the system instruction."""

    def test_string_passthrough(self):
        assert system_blocks("be brief") == ["be brief"]
        assert join_system("be brief") == "be brief"

    def test_blocks_joined_with_blank_line(self):
        system = [{"text": "one"}, SystemBlock(text="two")]
        assert system_blocks(system) == ["one", "two"]
        assert join_system(system) == "one\n\ntwo"

    def test_none_is_empty(self):
        assert system_blocks(None) == []
        assert join_system(None) == ""
