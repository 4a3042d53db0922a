"""Engine package - Workflow layer.

Modules:
    - orchestrator: Conversation workflows and in-flight guards
"""

from src.engine.orchestrator import Orchestrator, PendingConfirmation

__all__ = ["Orchestrator", "PendingConfirmation"]
