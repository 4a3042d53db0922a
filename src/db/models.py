"""Data models and enumerations for StyleSync.

Messages, style profiles and contacts are frozen dataclasses: every
change produces a new value via dataclasses.replace, so the store can
swap a whole Contact in one assignment and readers never see a
half-updated record.

This module defines:
    - Enumerations for sender and per-contact workflow state
    - Dataclasses for messages, style profiles and contacts
    - Identifier and avatar helpers
"""

import itertools
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from urllib.parse import quote_plus

from src.core.exceptions import ValidationError

# =============================================================================
# ENUMERATIONS
# =============================================================================


class Sender(str, Enum):
    """Who wrote a message.

    Values:
        SELF: The user
        OTHER: The contact
    """

    SELF = "me"
    OTHER = "them"


class AnalysisState(str, Enum):
    """Style analysis lifecycle for one contact."""

    IDLE = "idle"
    ANALYZING = "analyzing"
    ANALYZED = "analyzed"


class DraftState(str, Enum):
    """Reply pipeline lifecycle for one contact.

    Values:
        NONE: Nothing pending
        AWAITING_CONFIRMATION: Incoming message arrived, user hasn't asked for a draft
        DRAFTING: Draft request in flight
        DRAFT_READY: Draft waiting to be sent, edited or discarded
    """

    NONE = "none"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    DRAFTING = "drafting"
    DRAFT_READY = "draft_ready"


STYLE_SCORE_FIELDS = ("formality", "warmth", "humor", "brevity", "emoji_usage")
MAX_KEYWORDS = 5

_message_ids = itertools.count(1)


def utc_now() -> datetime:
    """Current instant, timezone-aware."""
    return datetime.now(timezone.utc)


def new_message_id() -> str:
    """Unique, monotonically increasing message identifier."""
    return f"msg-{next(_message_ids)}"


def default_avatar_url(name: str) -> str:
    """Placeholder avatar for contacts without a picture."""
    return f"https://ui-avatars.com/api/?name={quote_plus(name)}&background=random"


# =============================================================================
# DATACLASSES
# =============================================================================


@dataclass(frozen=True)
class Message:
    """A single chat message.

    Attributes:
        id: Unique identifier
        sender: SELF or OTHER
        text: Message body
        timestamp: When the message was created
    """

    id: str
    sender: Sender
    text: str
    timestamp: datetime = field(default_factory=utc_now)

    @property
    def is_self(self) -> bool:
        return self.sender == Sender.SELF


@dataclass(frozen=True)
class StyleProfile:
    """How the user writes to one contact.

    Scores are 0-100. Brevity 100 = very short messages.

    Attributes:
        formality: 100 is very formal
        warmth: 100 is very warm
        humor: 100 is very humorous
        brevity: 100 is very brief
        emoji_usage: Frequency of emoji use
        keywords: Characteristic words or phrases (at most 5)
        description: Qualitative persona summary
    """

    formality: int
    warmth: int
    humor: int
    brevity: int
    emoji_usage: int
    keywords: tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        for name in STYLE_SCORE_FIELDS:
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValidationError(f"{name} must be between 0 and 100, got {value}")

    @classmethod
    def from_dict(cls, data: Any) -> "StyleProfile":
        """Build a profile from a service payload.

        Accepts ``emojiUsage`` or ``emoji_usage``. Keywords beyond
        MAX_KEYWORDS are dropped.

        Raises:
            ValidationError: If a field is missing, mistyped or out of range
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Style payload must be an object, got {type(data).__name__}")

        payload = dict(data)
        if "emoji_usage" not in payload and "emojiUsage" in payload:
            payload["emoji_usage"] = payload["emojiUsage"]

        scores: dict[str, int] = {}
        for name in STYLE_SCORE_FIELDS:
            if name not in payload:
                raise ValidationError(f"Style payload missing '{name}'")
            value = payload[name]
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValidationError(f"'{name}' must be a number, got {value!r}")
            scores[name] = round(value)

        keywords = payload.get("keywords", [])
        if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
            raise ValidationError("'keywords' must be a list of strings")

        description = payload.get("description")
        if not isinstance(description, str):
            raise ValidationError("'description' must be a string")

        return cls(
            keywords=tuple(k.strip() for k in keywords if k.strip())[:MAX_KEYWORDS],
            description=description.strip(),
            **scores,
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire shape (camelCase emojiUsage, keyword list)."""
        return {
            "formality": self.formality,
            "warmth": self.warmth,
            "humor": self.humor,
            "brevity": self.brevity,
            "emojiUsage": self.emoji_usage,
            "keywords": list(self.keywords),
            "description": self.description,
        }


@dataclass(frozen=True)
class Contact:
    """A conversation thread with one counterpart.

    Attributes:
        id: Unique identifier
        name: Display name
        avatar_url: Avatar reference
        messages: Conversation in order, oldest first
        style: Inferred style profile, if analyzed
        last_analyzed_at: When the style profile was written
        draft_reply: Pending generated reply, if any
        analysis_state: Style analysis lifecycle state
    """

    id: str
    name: str
    avatar_url: str = ""
    messages: tuple[Message, ...] = ()
    style: Optional[StyleProfile] = None
    last_analyzed_at: Optional[datetime] = None
    draft_reply: Optional[str] = None
    analysis_state: AnalysisState = AnalysisState.IDLE

    @property
    def is_analyzing(self) -> bool:
        return self.analysis_state == AnalysisState.ANALYZING

    @property
    def last_message(self) -> Optional[Message]:
        return self.messages[-1] if self.messages else None

    def self_messages(self) -> list[Message]:
        """Messages written by the user."""
        return [m for m in self.messages if m.is_self]

    def recent_messages(self, limit: int) -> list[Message]:
        """The last ``limit`` messages, oldest first."""
        if limit <= 0:
            return []
        return list(self.messages[-limit:])

    def with_message(self, message: Message) -> "Contact":
        """Append a message.

        Sending anything supersedes the pending draft, so a SELF
        message also clears ``draft_reply``.
        """
        if message.is_self:
            return replace(self, messages=self.messages + (message,), draft_reply=None)
        return replace(self, messages=self.messages + (message,))
