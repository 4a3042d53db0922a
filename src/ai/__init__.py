"""AI package - style inference and reply drafting.

Both clients degrade to deterministic demo output when Claude is
unconfigured or failing; neither ever raises for service problems.

Modules:
    - claude_client: Shared async Anthropic client mixin
    - style_learner: Per-contact style profile inference
    - reply_generator: Style-consistent draft replies
"""
