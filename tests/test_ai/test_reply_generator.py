"""Tests for reply drafting."""

from unittest.mock import AsyncMock, patch

import pytest

from src.ai.reply_generator import (
    DEFAULT_REPLY_CASUAL,
    DEFAULT_REPLY_FORMAL,
    LAUGHTER_REPLY,
    MEETING_REPLY_CASUAL,
    MEETING_REPLY_FORMAL,
    QUESTION_REPLY_CASUAL,
    QUESTION_REPLY_FORMAL,
    ReplyGenerator,
    _clean_reply,
    mock_reply,
)
from src.core.exceptions import InferenceError
from src.db.models import Contact, Message, Sender, StyleProfile


def _style(formality: int) -> StyleProfile:
    return StyleProfile(
        formality=formality,
        warmth=50,
        humor=50,
        brevity=80,
        emoji_usage=10,
        description="Test persona.",
    )


def _contact(style=None, count: int = 3) -> Contact:
    messages = tuple(
        Message(
            id=str(i),
            sender=Sender.SELF if i % 2 else Sender.OTHER,
            text=f"line {i}",
        )
        for i in range(count)
    )
    return Contact(id="c1", name="Jamie", messages=messages, style=style)


class TestMockReply:
    """Rule-based demo replies."""

    def test_question_formal(self):
        assert mock_reply("Can you send the report?", _style(80)) == QUESTION_REPLY_FORMAL

    def test_question_casual(self):
        assert mock_reply("Can you send the report?", _style(10)) == QUESTION_REPLY_CASUAL

    def test_question_without_style_is_casual(self):
        assert mock_reply("u up?") == QUESTION_REPLY_CASUAL

    def test_threshold_is_exclusive(self):
        assert mock_reply("ok", _style(50)) == DEFAULT_REPLY_CASUAL
        assert mock_reply("ok", _style(51)) == DEFAULT_REPLY_FORMAL

    def test_laughter(self):
        assert mock_reply("HAHA that was wild", _style(90)) == LAUGHTER_REPLY

    def test_question_beats_laughter(self):
        assert mock_reply("lol did you see?", _style(10)) == QUESTION_REPLY_CASUAL

    def test_meeting_formal(self):
        assert mock_reply("Let's meet at 2", _style(80)) == MEETING_REPLY_FORMAL

    def test_meeting_casual(self):
        assert mock_reply("call me later", _style(20)) == MEETING_REPLY_CASUAL

    def test_default(self):
        assert mock_reply("Thanks.", _style(80)) == DEFAULT_REPLY_FORMAL
        assert mock_reply("", None) == DEFAULT_REPLY_CASUAL


class TestCleanReply:
    """Quote and whitespace stripping."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ('  "Sure thing!"  ', "Sure thing!"),
            ("'ok'", "ok"),
            ('"mismatched\'', '"mismatched\''),
            ('""', ""),
            ("plain", "plain"),
        ],
    )
    def test_clean(self, raw, expected):
        assert _clean_reply(raw) == expected


class TestReplyGenerator:
    """Generation with and without Claude."""

    @pytest.mark.asyncio
    async def test_demo_mode(self, demo_config):
        reply = await ReplyGenerator(demo_config).generate_reply(
            _contact(_style(80)), "Are we still on?"
        )
        assert reply == QUESTION_REPLY_FORMAL

    @pytest.mark.asyncio
    async def test_live_reply_is_cleaned(self, live_config):
        generator = ReplyGenerator(live_config)
        with patch.object(
            ReplyGenerator, "_complete", new_callable=AsyncMock, return_value='"See you then!"'
        ) as complete:
            reply = await generator.generate_reply(_contact(_style(30)), "2pm?")
        assert reply == "See you then!"
        assert complete.call_args.kwargs["max_tokens"] == 300

    @pytest.mark.asyncio
    async def test_quotes_only_reply_falls_back(self, live_config):
        generator = ReplyGenerator(live_config)
        with patch.object(ReplyGenerator, "_complete", new_callable=AsyncMock, return_value='""'):
            reply = await generator.generate_reply(_contact(_style(10)), "haha")
        assert reply == LAUGHTER_REPLY

    @pytest.mark.asyncio
    async def test_api_failure_falls_back(self, live_config):
        generator = ReplyGenerator(live_config)
        with patch.object(
            ReplyGenerator,
            "_complete",
            new_callable=AsyncMock,
            side_effect=InferenceError("quota"),
        ):
            reply = await generator.generate_reply(_contact(None), "ok")
        assert reply == DEFAULT_REPLY_CASUAL


class TestBuildPrompt:
    """Prompt assembly."""

    def test_history_is_windowed(self, live_config):
        live_config.history_window = 2
        prompt = ReplyGenerator(live_config)._build_prompt(_contact(count=5), "hello")
        assert "Me: line 3" in prompt
        assert "Jamie: line 4" in prompt
        assert "line 2" not in prompt

    def test_style_guidance(self, live_config):
        prompt = ReplyGenerator(live_config)._build_prompt(_contact(_style(80)), "hello")
        assert "Test persona." in prompt
        assert "Formality: 80" in prompt
        assert '"hello"' in prompt

    def test_no_style_guidance(self, live_config):
        prompt = ReplyGenerator(live_config)._build_prompt(_contact(None), "hello")
        assert "Respond naturally based on the conversation history." in prompt

    def test_empty_history(self, live_config):
        prompt = ReplyGenerator(live_config)._build_prompt(_contact(count=0), "hello")
        assert "(no earlier messages)" in prompt
