"""StyleSync Source Package.

Per-contact communication style analysis and reply drafting.

Layers:
    - core: Configuration, logging, exceptions, services, tasks
    - db: Models, conversation store, transcript intake, seed data
    - ai: Style inference and reply generation (Claude, with demo fallback)
    - engine: Workflow orchestration
"""

__version__ = "0.1.0"
