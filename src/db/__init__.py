"""Data package - models, in-memory store, transcript intake, seed data.

Modules:
    - models: Dataclasses and enumerations
    - store: Conversation store (contact id -> Contact)
    - intake: Transcript importer
    - seed: Default contacts
"""

from src.db.models import (
    AnalysisState,
    Contact,
    DraftState,
    Message,
    Sender,
    StyleProfile,
)

__all__ = [
    # Enums
    "Sender",
    "AnalysisState",
    "DraftState",
    # Dataclasses
    "Message",
    "StyleProfile",
    "Contact",
]
