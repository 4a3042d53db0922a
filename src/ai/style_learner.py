"""Style learner: infer how the user writes to one contact.

Reads the user's own messages in a thread and asks Claude for a
StyleProfile (five 0-100 scores, keywords, description). Without an
API key, or when the call fails, returns a canned profile picked from
the contact's name so callers always get a well-formed result.
"""

import asyncio
import json
import re
from typing import Iterable, Optional

from src.ai.claude_client import ClaudeClientMixin
from src.core.config import Config, get_config
from src.core.exceptions import InferenceError, ValidationError
from src.core.logging import get_logger
from src.db.models import Message, Sender, StyleProfile

logger = get_logger(__name__)

NEUTRAL_PROFILE = StyleProfile(
    formality=50,
    warmth=50,
    humor=50,
    brevity=50,
    emoji_usage=0,
    keywords=(),
    description="insufficient data",
)

PROFESSIONAL_PROFILE = StyleProfile(
    formality=85,
    warmth=30,
    humor=15,
    brevity=70,
    emoji_usage=5,
    keywords=("Certainly", "Will do", "Thanks", "Report", "Meeting"),
    description=(
        "Professional, concise, and respectful. "
        "You avoid slang and keep messages work-focused."
    ),
)

FAMILY_PROFILE = StyleProfile(
    formality=20,
    warmth=95,
    humor=60,
    brevity=40,
    emoji_usage=60,
    keywords=("Love you", "Ok", "Call me", "Home", "Soon"),
    description="Warm and affectionate. You prioritize connection and frequent updates.",
)

CASUAL_PROFILE = StyleProfile(
    formality=15,
    warmth=80,
    humor=85,
    brevity=30,
    emoji_usage=90,
    keywords=("Omg", "Literally", "Dead", "Rn", "Lmao"),
    description=(
        "Highly casual and expressive. "
        "You use internet slang, lots of emojis, and an energetic tone."
    ),
)

# Substring matches against the lower-cased contact name
PROFESSIONAL_MARKERS = ("boss", "mr", "mrs", "dr.", "prof")
FAMILY_MARKERS = ("mom", "dad", "mum", "grandma", "grandpa")

ANALYZE_SYSTEM = (
    "You analyze how a person writes text messages to one specific contact. "
    "Output JSON only."
)

_JSON_OBJECT = re.compile(r"\{.*\}", re.S)


def mock_profile(contact_name: str) -> StyleProfile:
    """Pick a canned profile from the contact's name.

    Professional markers win over family markers; anything else
    gets the casual profile.
    """
    name = contact_name.lower()
    if any(marker in name for marker in PROFESSIONAL_MARKERS):
        return PROFESSIONAL_PROFILE
    if any(marker in name for marker in FAMILY_MARKERS):
        return FAMILY_PROFILE
    return CASUAL_PROFILE


def summarize_profile(profile: StyleProfile) -> str:
    """One-paragraph summary for prompts and CLI output."""
    summary = (
        f"{profile.description} "
        f"Formality {profile.formality}, warmth {profile.warmth}, humor {profile.humor}, "
        f"brevity {profile.brevity}, emoji usage {profile.emoji_usage}."
    )
    if profile.keywords:
        summary += f" Typical phrases: {', '.join(profile.keywords)}."
    return summary


def build_analysis_prompt(contact_name: str, own_texts: Iterable[str]) -> str:
    """Prompt asking for a JSON style profile."""
    parts = [
        f'Analyze the following messages sent by a user to their contact named "{contact_name}".',
        "Determine the user's communication style specifically for this relationship.",
        "",
        "Messages:",
        "\n".join(own_texts),
        "",
        "Return a JSON object with exactly these fields:",
        '  "formality": 0-100 (100 is very formal)',
        '  "warmth": 0-100 (100 is very warm)',
        '  "humor": 0-100 (100 is very humorous)',
        '  "brevity": 0-100 (100 is very brief/short messages)',
        '  "emojiUsage": 0-100 score for frequency of emoji use',
        '  "keywords": list of 3-5 frequent characteristic words or phrases',
        '  "description": a concise qualitative description of the communication persona',
    ]
    return "\n".join(parts)


def parse_style_response(text: str) -> StyleProfile:
    """Extract and validate the JSON profile from a Claude reply.

    Tolerates code fences or prose around the object.

    Raises:
        InferenceError: If no valid profile can be read
    """
    match = _JSON_OBJECT.search(text)
    if not match:
        raise InferenceError("Style reply contained no JSON object")
    try:
        return StyleProfile.from_dict(json.loads(match.group(0)))
    except json.JSONDecodeError as e:
        raise InferenceError(f"Style reply is not valid JSON: {e}") from e
    except ValidationError as e:
        raise InferenceError(f"Style reply has invalid fields: {e}") from e


class StyleAnalyzer(ClaudeClientMixin):
    """Style inference client.

    Never raises for service problems: missing key, API errors and
    malformed replies all fall back to ``mock_profile``.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        self._config = config or get_config()
        self._client = None

    def _get_claude_config(self):
        return self._config

    async def analyze_style(self, contact_name: str, messages: Iterable[Message]) -> StyleProfile:
        """Infer the user's style toward a contact.

        Args:
            contact_name: Contact display name
            messages: Full thread; only the user's own messages are used

        Returns:
            StyleProfile (live, neutral, or demo)
        """
        own_texts = [m.text for m in messages if m.sender == Sender.SELF]
        if not "".join(own_texts).strip():
            logger.info(
                "No messages from the user, returning neutral profile",
                extra={"context": {"contact": contact_name}},
            )
            return NEUTRAL_PROFILE

        if not self.is_available():
            logger.warning(
                "Demo mode: CLAUDE_API_KEY not set. Returning simulated analysis.",
                extra={"context": {"contact": contact_name}},
            )
            await self._demo_pause()
            return mock_profile(contact_name)

        prompt = build_analysis_prompt(contact_name, own_texts)
        try:
            text = await self._complete("style_learner", prompt, system=ANALYZE_SYSTEM)
            profile = parse_style_response(text)
        except InferenceError as e:
            logger.warning(
                f"Analysis failed, falling back to demo mode: {e}",
                extra={"context": {"contact": contact_name}},
            )
            return mock_profile(contact_name)

        logger.info(
            "Style analyzed",
            extra={"context": {"contact": contact_name, "messages": len(own_texts)}},
        )
        return profile

    async def _demo_pause(self) -> None:
        if self._config.demo_delay > 0:
            await asyncio.sleep(self._config.demo_delay)
