"""Orchestrator - Conversation workflows and in-flight guards.

Sequences user actions against the store and the two AI clients:
    - select_contact: switch threads, auto-analyze unprofiled contacts
    - analyze: infer a style profile (one in flight per contact)
    - send / simulate_incoming: append messages
    - request_draft: draft a reply (one in flight overall)
    - import_transcript: create a contact from pasted text

Everything runs on one asyncio loop. State is read from the store
right before each request and written back by contact id after it,
so a result that arrives after the user has moved on still lands on
the contact it was requested for.

Usage:
    orchestrator = Orchestrator(ConversationStore(seed_contacts()))
    orchestrator.select_contact("2")
    orchestrator.simulate_incoming("Can we meet at 3?")
    draft = await orchestrator.accept_confirmation()
"""

import asyncio
from dataclasses import dataclass, replace
from typing import Optional

from src.ai.reply_generator import ReplyGenerator
from src.ai.style_learner import StyleAnalyzer
from src.core.config import Config
from src.core.exceptions import ImportError_
from src.core.logging import get_logger
from src.core.tasks import TaskManager
from src.db.intake import parse_transcript, validate_import
from src.db.models import (
    AnalysisState,
    Contact,
    DraftState,
    Message,
    Sender,
    StyleProfile,
    default_avatar_url,
    new_message_id,
    utc_now,
)
from src.db.store import ConversationStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class PendingConfirmation:
    """An incoming message waiting for the user to ask for a draft.

    Attributes:
        contact_id: Contact the message arrived on
        incoming_text: Text a draft would reply to
    """

    contact_id: str
    incoming_text: str


def _finish_analysis(contact: Contact, profile: Optional[StyleProfile]) -> Contact:
    """Leave the ANALYZING state, writing the profile if there is one."""
    if profile is None:
        # Keep whatever profile was there before
        state = AnalysisState.ANALYZED if contact.style else AnalysisState.IDLE
        return replace(contact, analysis_state=state)
    return replace(
        contact,
        style=profile,
        analysis_state=AnalysisState.ANALYZED,
        last_analyzed_at=utc_now(),
    )


class Orchestrator:
    """Workflow layer over the conversation store.

    The workflow methods are the only way state changes; everything
    else here is a read-only view for the presentation layer.
    """

    def __init__(
        self,
        store: ConversationStore,
        analyzer: Optional[StyleAnalyzer] = None,
        generator: Optional[ReplyGenerator] = None,
        tasks: Optional[TaskManager] = None,
        config: Optional[Config] = None,
    ) -> None:
        self.store = store
        self.analyzer = analyzer or StyleAnalyzer(config)
        self.generator = generator or ReplyGenerator(config)
        self.tasks = tasks or TaskManager()
        self._active_contact_id: Optional[str] = None
        self._generating_contact_id: Optional[str] = None
        self._pending_confirmation: Optional[PendingConfirmation] = None

    # -------------------------------------------------------------------------
    # Read-only view
    # -------------------------------------------------------------------------

    @property
    def active_contact_id(self) -> Optional[str]:
        return self._active_contact_id

    @property
    def active_contact(self) -> Optional[Contact]:
        if self._active_contact_id is None:
            return None
        return self.store.get(self._active_contact_id)

    @property
    def generating_contact_id(self) -> Optional[str]:
        return self._generating_contact_id

    @property
    def pending_confirmation(self) -> Optional[PendingConfirmation]:
        return self._pending_confirmation

    def contacts(self) -> list[Contact]:
        """All contacts in display order."""
        return self.store.contacts()

    def is_generating(self, contact_id: Optional[str] = None) -> bool:
        """Whether a draft is in flight (for ``contact_id``, or at all)."""
        if contact_id is None:
            return self._generating_contact_id is not None
        return self._generating_contact_id == contact_id

    def analysis_state(self, contact_id: str) -> Optional[AnalysisState]:
        contact = self.store.get(contact_id)
        return contact.analysis_state if contact else None

    def draft_state(self, contact_id: str) -> DraftState:
        """Where the contact sits in the reply pipeline."""
        if self._generating_contact_id == contact_id:
            return DraftState.DRAFTING
        pending = self._pending_confirmation
        if pending is not None and pending.contact_id == contact_id:
            return DraftState.AWAITING_CONFIRMATION
        contact = self.store.get(contact_id)
        if contact is not None and contact.draft_reply:
            return DraftState.DRAFT_READY
        return DraftState.NONE

    # -------------------------------------------------------------------------
    # Workflows
    # -------------------------------------------------------------------------

    def select_contact(self, contact_id: str) -> Optional[asyncio.Task]:
        """Make a contact active; analyze it in the background if it has no profile.

        Must be called with an event loop running when an analysis
        may be scheduled.

        Returns:
            The background analysis task, or None if none was needed
        """
        contact = self.store.get(contact_id)
        if contact is None:
            logger.warning(
                "Select ignored, unknown contact", extra={"context": {"contact_id": contact_id}}
            )
            return None

        self._set_active(contact_id)

        if contact.style is None and not contact.is_analyzing:
            return self._schedule_analysis(contact_id)
        return None

    async def analyze(self, contact_id: str) -> Optional[StyleProfile]:
        """Infer and store the style profile for one contact.

        No-op if the contact is missing or already being analyzed.
        The ANALYZING state is cleared on every exit path; on failure
        the previous profile is kept.

        Returns:
            The new profile, or None if nothing was written
        """
        contact = self.store.get(contact_id)
        if contact is None:
            logger.debug(
                "Analyze ignored, unknown contact", extra={"context": {"contact_id": contact_id}}
            )
            return None
        if contact.is_analyzing:
            logger.info(
                "Analysis already in flight", extra={"context": {"contact_id": contact_id}}
            )
            return None

        # Check and set with no await in between
        self.store.update(
            contact_id, lambda c: replace(c, analysis_state=AnalysisState.ANALYZING)
        )
        logger.info("Analyzing style", extra={"context": {"contact_id": contact_id}})

        profile: Optional[StyleProfile] = None
        try:
            profile = await self.analyzer.analyze_style(contact.name, contact.messages)
        except Exception:
            logger.error(
                "Failed to analyze", exc_info=True, extra={"context": {"contact_id": contact_id}}
            )
        finally:
            self.store.update(contact_id, lambda c: _finish_analysis(c, profile))
        return profile

    def send(self, text: str) -> Optional[Message]:
        """Append a message from the user to the active contact.

        Any send supersedes the pending draft, whether or not the
        draft is what was sent.

        Returns:
            The appended message, or None if nothing was sent
        """
        if not text or not text.strip():
            return None
        return self._append(Sender.SELF, text)

    def simulate_incoming(self, text: str) -> Optional[Message]:
        """Append a message from the contact and ask the user about a draft.

        Does not request a draft itself; see ``accept_confirmation``.
        """
        if not text or not text.strip():
            return None
        message = self._append(Sender.OTHER, text)
        if message is not None and self._active_contact_id is not None:
            self._pending_confirmation = PendingConfirmation(self._active_contact_id, text)
        return message

    async def accept_confirmation(self) -> Optional[str]:
        """User said yes to a draft for the pending incoming message."""
        pending = self._pending_confirmation
        if pending is None:
            return None
        if pending.contact_id != self._active_contact_id:
            self._pending_confirmation = None
            return None
        return await self.request_draft(pending.incoming_text)

    def dismiss_confirmation(self) -> None:
        """User declined a draft for the pending incoming message."""
        self._pending_confirmation = None

    async def request_draft(self, incoming_text: str) -> Optional[str]:
        """Draft a reply for the active contact.

        Only one draft may be in flight at a time across all contacts.
        The draft is written to the contact that was active when the
        request started. The generating marker is cleared on every
        exit path.

        Returns:
            The draft, or None if the request was refused or failed
        """
        contact_id = self._active_contact_id
        if contact_id is None:
            return None
        if self._generating_contact_id is not None:
            logger.info(
                "Draft already in flight",
                extra={"context": {"contact_id": contact_id, "busy": self._generating_contact_id}},
            )
            return None
        contact = self.store.get(contact_id)
        if contact is None:
            return None

        self._generating_contact_id = contact_id
        pending = self._pending_confirmation
        if pending is not None and pending.contact_id == contact_id:
            self._pending_confirmation = None

        try:
            reply = await self.generator.generate_reply(contact, incoming_text)
        except Exception:
            logger.error(
                "Draft generation failed",
                exc_info=True,
                extra={"context": {"contact_id": contact_id}},
            )
            return None
        finally:
            self._generating_contact_id = None

        self.store.update(contact_id, lambda c: replace(c, draft_reply=reply))
        return reply

    def import_transcript(self, name: str, raw_text: str) -> Optional[Contact]:
        """Create a contact from a pasted transcript and analyze it.

        Blank name or text is rejected without touching state.

        Returns:
            The new, now active, contact, or None if rejected
        """
        try:
            validate_import(name, raw_text)
        except ImportError_ as e:
            logger.info(f"Import rejected: {e}")
            return None

        name = name.strip()
        parsed = parse_transcript(name, raw_text)
        contact = Contact(
            id=f"imported-{parsed.batch}",
            name=name,
            avatar_url=default_avatar_url(name),
            messages=tuple(parsed.messages),
        )
        self.store.upsert(contact, front=True)
        self._set_active(contact.id)
        self._schedule_analysis(contact.id)

        logger.info(
            "Contact imported",
            extra={"context": {"contact_id": contact.id, "messages": len(contact.messages)}},
        )
        return contact

    # -------------------------------------------------------------------------
    # Background work
    # -------------------------------------------------------------------------

    async def wait_for_background(self) -> None:
        """Wait for scheduled analyses to finish."""
        await self.tasks.drain()

    async def shutdown(self) -> None:
        """Cancel background work still outstanding."""
        await self.tasks.shutdown()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _set_active(self, contact_id: str) -> None:
        if contact_id == self._active_contact_id:
            return
        pending = self._pending_confirmation
        if pending is not None and pending.contact_id != contact_id:
            # Confirmations belong to the contact they arrived on
            self._pending_confirmation = None
        self._active_contact_id = contact_id

    def _schedule_analysis(self, contact_id: str) -> asyncio.Task:
        task_name = f"analyze:{contact_id}"
        running = self.tasks.get(task_name)
        if running is not None and not running.done():
            return running
        return self.tasks.submit(task_name, self.analyze, contact_id)

    def _append(self, sender: Sender, text: str) -> Optional[Message]:
        contact_id = self._active_contact_id
        if contact_id is None:
            return None
        message = Message(id=new_message_id(), sender=sender, text=text, timestamp=utc_now())
        if self.store.update(contact_id, lambda c: c.with_message(message)) is None:
            return None
        logger.debug(
            "Message appended",
            extra={"context": {"contact_id": contact_id, "sender": sender.value}},
        )
        return message
