"""Shared pytest fixtures for StyleSync tests.

Fixtures:
    - isolated_env: No API key in the environment, fresh config singletons (autouse)
    - demo_config: Config with no API key (demo mode)
    - live_config: Config with a fake API key
    - store: ConversationStore seeded with the default contacts
    - fake_analyzer / fake_generator: Controllable stand-ins for the AI clients
    - orchestrator: Orchestrator wired to the store and fakes
"""

import asyncio
from pathlib import Path
from typing import Optional

import pytest

from src.core.config import Config, reset_config
from src.core.services import reset_service_registry
from src.db.models import Contact, Message, StyleProfile
from src.db.seed import seed_contacts
from src.db.store import ConversationStore
from src.engine.orchestrator import Orchestrator


class FakeAnalyzer:
    """Records calls; optionally waits on ``gate`` or raises ``error``."""

    def __init__(self, profile: Optional[StyleProfile] = None) -> None:
        self.profile = profile or StyleProfile(
            formality=40,
            warmth=70,
            humor=60,
            brevity=50,
            emoji_usage=30,
            keywords=("hey", "cool", "sure"),
            description="Friendly and relaxed.",
        )
        self.calls: list[tuple[str, tuple[Message, ...]]] = []
        self.gate: Optional[asyncio.Event] = None
        self.error: Optional[Exception] = None

    async def analyze_style(self, contact_name, messages) -> StyleProfile:
        self.calls.append((contact_name, tuple(messages)))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.profile


class FakeGenerator:
    """Records calls; optionally waits on ``gate`` or raises ``error``."""

    def __init__(self, reply: str = "On my way!") -> None:
        self.reply = reply
        self.calls: list[tuple[Contact, str]] = []
        self.gate: Optional[asyncio.Event] = None
        self.error: Optional[Exception] = None

    async def generate_reply(self, contact, incoming_text) -> str:
        self.calls.append((contact, incoming_text))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path: Path):
    """Keep real credentials and .env files out of every test."""
    monkeypatch.delenv("CLAUDE_API_KEY", raising=False)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    reset_service_registry()
    yield
    reset_config()
    reset_service_registry()


@pytest.fixture
def demo_config(tmp_path: Path) -> Config:
    """Config with no API key: AI clients run in demo mode."""
    return Config(log_path=tmp_path / "logs", claude_api_key=None)


@pytest.fixture
def live_config(tmp_path: Path) -> Config:
    """Config with a (fake) API key: AI clients try Claude."""
    return Config(log_path=tmp_path / "logs", claude_api_key="sk-ant-test-key")


@pytest.fixture
def store() -> ConversationStore:
    """Store seeded with Sarah (1), Mr. Johnson (2) and Mom (3)."""
    return ConversationStore(seed_contacts())


@pytest.fixture
def fake_analyzer() -> FakeAnalyzer:
    return FakeAnalyzer()


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def orchestrator(store, fake_analyzer, fake_generator, demo_config) -> Orchestrator:
    """Orchestrator over the seeded store with fake AI clients."""
    return Orchestrator(
        store,
        analyzer=fake_analyzer,  # type: ignore[arg-type]
        generator=fake_generator,  # type: ignore[arg-type]
        config=demo_config,
    )

