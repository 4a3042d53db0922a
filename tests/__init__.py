"""StyleSync Test Suite.

Test organization mirrors src/ structure:
    tests/
    ├── conftest.py          # Shared fixtures
    ├── test_core/           # Config, logging, exceptions, services, tasks
    ├── test_db/             # Models, store, transcript intake
    ├── test_ai/             # Style inference and reply generation
    └── test_engine/         # Orchestrator workflows

Markers:
    - @pytest.mark.asyncio: Coroutine tests (pytest-asyncio)
    - @pytest.mark.slow: Tests taking > 1 second
    - @pytest.mark.integration: Tests requiring external services
"""
