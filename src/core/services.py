"""Service registry for tracking integration availability.

Tracks whether the Claude inference service is configured. When it
isn't, StyleSync runs in demo mode: both AI clients return simulated
results instead of calling out. Missing credentials are expected,
not an error.

Usage:
    from src.core.services import get_service_registry

    registry = get_service_registry()
    if registry.is_available("claude"):
        ...

    # Full readiness report (for CLI diagnostics)
    report = registry.readiness_report()
    print(report.summary)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from src.core.config import get_config
from src.core.logging import get_logger

logger = get_logger(__name__)


class RunMode(str, Enum):
    """How AI features will behave."""

    LIVE = "live"
    DEMO = "demo"


@dataclass
class ServiceStatus:
    """Status of a single service.

    Attributes:
        name: Human-readable service name
        service_key: Registry lookup key
        local: Runs in-process with no credentials
        configured: Whether credentials are present
        available: Whether the service can be used right now
        reason: Why the service is unavailable (empty if available)
        credentials_present: Which credential fields are set
        credentials_missing: Which credential fields are missing
    """

    name: str
    service_key: str
    local: bool = False
    configured: bool = False
    available: bool = False
    reason: str = ""
    credentials_present: list[str] = field(default_factory=list)
    credentials_missing: list[str] = field(default_factory=list)


@dataclass
class ReadinessReport:
    """Readiness across all services.

    Attributes:
        services: Status of every registered service
        mode: LIVE when Claude is configured, DEMO otherwise
        summary: Human-readable summary string
    """

    services: list[ServiceStatus] = field(default_factory=list)
    mode: RunMode = RunMode.DEMO
    summary: str = ""


class ServiceRegistry:
    """Central registry of the services StyleSync depends on.

    Checks config once and caches the results.
    """

    def __init__(self) -> None:
        self._statuses: dict[str, ServiceStatus] = {}
        self._refresh()

    def _refresh(self) -> None:
        """Re-check all service configurations against current config."""
        config = get_config()
        self._statuses.clear()

        claude_creds = {"CLAUDE_API_KEY": config.claude_api_key}
        claude_present = [k for k, v in claude_creds.items() if v]
        claude_missing = [k for k, v in claude_creds.items() if not v]
        claude_configured = len(claude_missing) == 0

        self._statuses["claude"] = ServiceStatus(
            name="Claude AI (Anthropic)",
            service_key="claude",
            configured=claude_configured,
            available=claude_configured,
            reason="" if claude_configured else "CLAUDE_API_KEY not set (demo mode)",
            credentials_present=claude_present,
            credentials_missing=claude_missing,
        )

        # Transcript import is local, no credentials needed
        self._statuses["transcript_import"] = ServiceStatus(
            name="Transcript Importer",
            service_key="transcript_import",
            local=True,
            configured=True,
            available=True,
        )

    def check(self, service_key: str) -> ServiceStatus:
        """Check status of a specific service.

        Args:
            service_key: Service identifier (e.g. "claude")

        Returns:
            ServiceStatus for the requested service

        Raises:
            KeyError: If service_key is not registered
        """
        if service_key not in self._statuses:
            raise KeyError(
                f"Unknown service '{service_key}'. "
                f"Known services: {', '.join(sorted(self._statuses.keys()))}"
            )
        return self._statuses[service_key]

    def is_available(self, service_key: str) -> bool:
        """Quick boolean check: can this service be used right now?"""
        try:
            return self.check(service_key).available
        except KeyError:
            return False

    def require(self, service_key: str) -> None:
        """Assert that a service is available, or raise with a clear message.

        Args:
            service_key: Service identifier

        Raises:
            ConfigurationError: If the service is not available
        """
        from src.core.exceptions import ConfigurationError

        status = self.check(service_key)
        if not status.available:
            raise ConfigurationError(f"{status.name} is not available: {status.reason}")

    @property
    def mode(self) -> RunMode:
        """LIVE when Claude can be called, DEMO otherwise."""
        return RunMode.LIVE if self.is_available("claude") else RunMode.DEMO

    def readiness_report(self) -> ReadinessReport:
        """Generate a readiness report for all services."""
        services = list(self._statuses.values())
        mode = self.mode

        lines = [f"  Mode: {mode.value.upper()}"]
        if mode == RunMode.DEMO:
            lines.append("    Style analysis and drafts use simulated responses.")
        for svc in services:
            icon = "+" if svc.available else "-"
            detail = svc.reason if svc.reason else ("local" if svc.local else "configured")
            lines.append(f"    [{icon}] {svc.name}: {detail}")

        return ReadinessReport(services=services, mode=mode, summary="\n".join(lines))

    def log_status(self) -> None:
        """Log the current service status at startup."""
        for svc in self._statuses.values():
            if svc.available:
                logger.info(
                    f"Service ready: {svc.name}",
                    extra={"context": {"service": svc.service_key}},
                )
            else:
                # Unconfigured Claude just means demo mode
                logger.warning(
                    f"Service not configured: {svc.name} - {svc.reason}",
                    extra={"context": {"service": svc.service_key}},
                )


# Singleton
_registry: Optional[ServiceRegistry] = None


def get_service_registry() -> ServiceRegistry:
    """Return the cached ServiceRegistry singleton."""
    global _registry
    if _registry is None:
        _registry = ServiceRegistry()
    return _registry


def reset_service_registry() -> None:
    """Reset the cached registry. Used for testing."""
    global _registry
    _registry = None
