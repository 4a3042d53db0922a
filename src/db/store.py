"""In-memory conversation store.

Owns the mapping of contact id to Contact. Every mutation is a
whole-Contact replace keyed by id; Contact values are frozen, so a
reader holding an old value never sees it change underneath it.

All access happens on one event loop thread, so there is no locking.
Nothing is persisted between sessions.

Usage:
    from src.db.store import ConversationStore

    store = ConversationStore(seed_contacts())
    store.update("2", lambda c: replace(c, draft_reply=None))
"""

from typing import Callable, Iterable, Iterator, Optional

from src.core.logging import get_logger
from src.db.models import Contact

logger = get_logger(__name__)


class ConversationStore:
    """Single authoritative copy of every Contact."""

    def __init__(self, contacts: Optional[Iterable[Contact]] = None) -> None:
        self._contacts: dict[str, Contact] = {}
        self._order: list[str] = []
        for contact in contacts or ():
            self.upsert(contact)

    def get(self, contact_id: str) -> Optional[Contact]:
        """Get contact by id.

        Returns:
            The current Contact, or None if not found
        """
        return self._contacts.get(contact_id)

    def upsert(self, contact: Contact, *, front: bool = False) -> None:
        """Insert or replace the entry for ``contact.id``.

        Args:
            contact: New value for the entry
            front: Place a newly inserted contact first in display order.
                Replacing an existing entry keeps its position.
        """
        if contact.id not in self._contacts:
            if front:
                self._order.insert(0, contact.id)
            else:
                self._order.append(contact.id)
        self._contacts[contact.id] = contact

    def update(
        self, contact_id: str, mutator: Callable[[Contact], Contact]
    ) -> Optional[Contact]:
        """Apply a pure transformation to one contact and write it back.

        A missing contact is a silent no-op.

        Args:
            contact_id: Contact to update
            mutator: Function from the current Contact to its replacement

        Returns:
            The stored replacement, or None if the contact doesn't exist
        """
        current = self._contacts.get(contact_id)
        if current is None:
            logger.debug(
                "Update skipped, contact missing", extra={"context": {"contact_id": contact_id}}
            )
            return None
        updated = mutator(current)
        if updated.id != contact_id:
            raise ValueError(f"Mutator changed contact id {contact_id!r} -> {updated.id!r}")
        self._contacts[contact_id] = updated
        return updated

    def contacts(self) -> list[Contact]:
        """All contacts in display order."""
        return [self._contacts[cid] for cid in self._order]

    def __contains__(self, contact_id: object) -> bool:
        return contact_id in self._contacts

    def __len__(self) -> int:
        return len(self._contacts)

    def __iter__(self) -> Iterator[Contact]:
        return iter(self.contacts())
