"""Tests for the in-memory conversation store."""

from dataclasses import replace

import pytest

from src.db.models import Contact
from src.db.store import ConversationStore


class TestConversationStore:
    """Keyed replace semantics."""

    def test_seeded_order(self, store: ConversationStore):
        assert [c.id for c in store.contacts()] == ["1", "2", "3"]
        assert len(store) == 3
        assert "2" in store
        assert "9" not in store

    def test_get_missing_returns_none(self, store: ConversationStore):
        assert store.get("missing") is None

    def test_upsert_front(self, store: ConversationStore):
        store.upsert(Contact(id="new", name="New"), front=True)
        assert [c.id for c in store][0] == "new"

    def test_upsert_replace_keeps_position(self, store: ConversationStore):
        renamed = replace(store.get("2"), name="Boss")
        store.upsert(renamed, front=True)
        assert [c.id for c in store.contacts()] == ["1", "2", "3"]
        assert store.get("2").name == "Boss"

    def test_update_replaces_whole_contact(self, store: ConversationStore):
        before = store.get("1")
        after = store.update("1", lambda c: replace(c, draft_reply="omw"))
        assert after is store.get("1")
        assert after.draft_reply == "omw"
        assert before.draft_reply is None

    def test_update_missing_is_noop(self, store: ConversationStore):
        assert store.update("missing", lambda c: replace(c, name="x")) is None
        assert len(store) == 3

    def test_update_cannot_change_id(self, store: ConversationStore):
        with pytest.raises(ValueError):
            store.update("1", lambda c: replace(c, id="other"))
        assert store.get("1") is not None

    def test_empty_store(self):
        assert ConversationStore().contacts() == []
