"""Transcript intake: pasted chat text to structured messages.

Line-prefix heuristics, not a grammar. One message per line:
    - "Me:" / "Myself:" (any case)      -> SELF, prefix stripped
    - "<contact name>:" (any case)      -> OTHER, prefix stripped
    - anything else                     -> OTHER, line kept as-is
    - blank lines                       -> skipped

Timestamps embedded in the source text are not parsed; every message
is stamped with the import time.

Usage:
    from src.db.intake import parse_transcript

    result = parse_transcript("Jessica", "Me: Hey\\nJessica: Hi")
    result.messages  # [Message(SELF, "Hey"), Message(OTHER, "Hi")]
"""

import uuid
from dataclasses import dataclass, field
from typing import Optional

from src.core.exceptions import ImportError_
from src.core.logging import get_logger
from src.db.models import Message, Sender, utc_now

logger = get_logger(__name__)

SELF_PREFIXES = ("me:", "myself:")


@dataclass
class TranscriptImport:
    """Result of parsing one transcript.

    Attributes:
        contact_name: Name the transcript was parsed against
        batch: Token shared by every message id in this import
        messages: Parsed messages in source order
        skipped_lines: Blank lines and empty labelled lines dropped
    """

    contact_name: str
    batch: str
    messages: list[Message] = field(default_factory=list)
    skipped_lines: int = 0

    @property
    def self_count(self) -> int:
        return sum(1 for m in self.messages if m.sender == Sender.SELF)

    @property
    def other_count(self) -> int:
        return sum(1 for m in self.messages if m.sender == Sender.OTHER)


def validate_import(name: str, text: str) -> None:
    """Reject imports with nothing to work with.

    Raises:
        ImportError_: If the contact name or transcript text is blank
    """
    if not name or not name.strip():
        raise ImportError_("Contact name is required")
    if not text or not text.strip():
        raise ImportError_("Transcript text is required")


def new_batch_token() -> str:
    """Short token unique to one import run."""
    return uuid.uuid4().hex[:12]


def classify_line(line: str, contact_name: str) -> tuple[Sender, str]:
    """Decide who wrote one non-blank line and extract its text.

    Args:
        line: Raw transcript line
        contact_name: Contact display name for the "<name>:" prefix

    Returns:
        (sender, text)
    """
    lower = line.lower()
    if lower.startswith(SELF_PREFIXES):
        return Sender.SELF, line[line.index(":") + 1 :].strip()

    name_prefix = contact_name.strip().lower() + ":"
    if lower.startswith(name_prefix):
        return Sender.OTHER, line[line.index(":") + 1 :].strip()

    # Unlabelled lines are attributed to the contact
    return Sender.OTHER, line


def parse_transcript(
    contact_name: str, raw_text: str, batch: Optional[str] = None
) -> TranscriptImport:
    """Parse a pasted transcript into ordered messages.

    Never raises on malformed input; ambiguous lines degrade to OTHER.

    Args:
        contact_name: Display name of the contact
        raw_text: Transcript, one message per line
        batch: Id token for this import (generated if omitted)

    Returns:
        TranscriptImport with messages in source order
    """
    result = TranscriptImport(contact_name=contact_name, batch=batch or new_batch_token())
    imported_at = utc_now()

    for index, line in enumerate(raw_text.splitlines()):
        if not line.strip():
            result.skipped_lines += 1
            continue

        sender, text = classify_line(line, contact_name)
        if not text.strip():
            # A bare "Me:" carries no message
            result.skipped_lines += 1
            continue
        result.messages.append(
            Message(
                id=f"imported-{result.batch}-{index}",
                sender=sender,
                text=text,
                timestamp=imported_at,
            )
        )

    logger.info(
        "Transcript parsed",
        extra={
            "context": {
                "contact": contact_name,
                "messages": len(result.messages),
                "self": result.self_count,
                "other": result.other_count,
                "skipped": result.skipped_lines,
            }
        },
    )
    return result
