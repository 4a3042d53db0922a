"""AI-powered reply drafting using Claude.

Drafts one reply to an incoming message in the user's voice for that
contact, using the contact's StyleProfile and the recent thread.

Usage:
    from src.ai.reply_generator import ReplyGenerator

    gen = ReplyGenerator()
    draft = await gen.generate_reply(contact, "are we still on for 2pm?")
"""

import asyncio
from typing import Optional

from src.ai.claude_client import ClaudeClientMixin
from src.core.config import Config, get_config
from src.core.exceptions import InferenceError
from src.core.logging import get_logger
from src.db.models import Contact, StyleProfile

logger = get_logger(__name__)

FORMAL_THRESHOLD = 50

QUESTION_REPLY_FORMAL = "I will look into that and get back to you shortly."
QUESTION_REPLY_CASUAL = "Idk tbh, lemme check! 🤔"
LAUGHTER_REPLY = "LMAO right?? 💀"
MEETING_REPLY_FORMAL = "I am available at 2 PM."
MEETING_REPLY_CASUAL = "Yeah sure! I'm free whenever."
DEFAULT_REPLY_FORMAL = "Acknowledged. Thank you."
DEFAULT_REPLY_CASUAL = "Sounds good!"

LAUGHTER_TOKENS = ("lol", "haha")
MEETING_TOKENS = ("call", "meet")


def _is_formal(style: Optional[StyleProfile]) -> bool:
    return style is not None and style.formality > FORMAL_THRESHOLD


def mock_reply(incoming_text: str, style: Optional[StyleProfile] = None) -> str:
    """Rule-based reply for demo mode.

    Pure and total: any string in, a non-empty reply out.
    """
    text = incoming_text.lower()
    formal = _is_formal(style)

    if "?" in text:
        return QUESTION_REPLY_FORMAL if formal else QUESTION_REPLY_CASUAL
    if any(token in text for token in LAUGHTER_TOKENS):
        return LAUGHTER_REPLY
    if any(token in text for token in MEETING_TOKENS):
        return MEETING_REPLY_FORMAL if formal else MEETING_REPLY_CASUAL
    return DEFAULT_REPLY_FORMAL if formal else DEFAULT_REPLY_CASUAL


def _clean_reply(text: str) -> str:
    """Strip whitespace and a single pair of wrapping quotes."""
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'"):
        text = text[1:-1].strip()
    return text


class ReplyGenerator(ClaudeClientMixin):
    """Reply generation client.

    Falls back to ``mock_reply`` when Claude is unconfigured, fails,
    or returns nothing usable.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        self._config = config or get_config()
        self._client = None

    def _get_claude_config(self):
        return self._config

    async def generate_reply(self, contact: Contact, incoming_text: str) -> str:
        """Draft a reply to ``incoming_text`` in the user's voice.

        Args:
            contact: Contact as currently stored (history + style)
            incoming_text: The message being replied to

        Returns:
            Draft reply text (never empty)
        """
        if not self.is_available():
            logger.warning(
                "Demo mode: CLAUDE_API_KEY not set. Returning simulated reply.",
                extra={"context": {"contact_id": contact.id}},
            )
            if self._config.demo_delay > 0:
                await asyncio.sleep(self._config.demo_delay)
            return mock_reply(incoming_text, contact.style)

        prompt = self._build_prompt(contact, incoming_text)
        try:
            reply = _clean_reply(await self._complete("reply_generator", prompt, max_tokens=300))
            if not reply:
                raise InferenceError("Reply was only quotes/whitespace")
        except InferenceError as e:
            logger.warning(
                f"Generation failed, falling back to demo mode: {e}",
                extra={"context": {"contact_id": contact.id}},
            )
            return mock_reply(incoming_text, contact.style)

        logger.info(
            "Draft generated",
            extra={"context": {"contact_id": contact.id, "chars": len(reply)}},
        )
        return reply

    def _build_prompt(self, contact: Contact, incoming_text: str) -> str:
        """Build prompt with recent history and style guidance."""
        history = "\n".join(
            f"{'Me' if m.is_self else contact.name}: {m.text}"
            for m in contact.recent_messages(self._config.history_window)
        )

        style = contact.style
        if style:
            style_guidance = (
                f"My usual style with {contact.name} is: {style.description} "
                f"Stats - Formality: {style.formality}, Humor: {style.humor}, "
                f"Emoji Usage: {style.emoji_usage}, Brevity: {style.brevity}."
            )
        else:
            style_guidance = "Respond naturally based on the conversation history."

        parts = [
            f"You are acting as 'Me'. You need to reply to a text from {contact.name}.",
            "",
            "History of conversation:",
            history or "(no earlier messages)",
            "",
            f"New incoming message from {contact.name}:",
            f'"{incoming_text}"',
            "",
            "Directives:",
            f"1. {style_guidance}",
            "2. Maintain the established tone (e.g. if I usually use lowercase "
            "or specific slang, do that).",
            "3. If brevity is high, keep it short.",
            "4. Provide ONLY the text of the reply, no quotes or explanations.",
        ]
        return "\n".join(parts)
