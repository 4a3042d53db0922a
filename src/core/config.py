"""Configuration management for StyleSync.

Loads configuration from environment variables and .env file.
Provides validation and sensible defaults.

Usage:
    from src.core.config import get_config, validate_config

    config = get_config()
    issues = validate_config(config)
    if issues:
        for issue in issues:
            print(f"Config issue: {issue}")
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from src.core.exceptions import ConfigurationError

CLAUDE_MODEL = "claude-sonnet-4-20250514"

DEFAULT_LOG_PATH = Path.home() / ".stylesync" / "logs"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_HISTORY_WINDOW = 10
DEFAULT_DEMO_DELAY = 0.0


@dataclass
class Config:
    """Application configuration.

    Attributes:
        log_path: Directory for log files
        claude_api_key: Anthropic Claude API key (None = demo mode)
        claude_model: Claude model used for analysis and drafting
        request_timeout: Seconds before a Claude request is abandoned
        history_window: Number of recent messages sent with a draft request
        demo_delay: Simulated latency for demo responses, in seconds
        debug: Enable debug mode
    """

    log_path: Path = field(default_factory=lambda: DEFAULT_LOG_PATH)
    claude_api_key: Optional[str] = None
    claude_model: str = CLAUDE_MODEL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    history_window: int = DEFAULT_HISTORY_WINDOW
    demo_delay: float = DEFAULT_DEMO_DELAY
    debug: bool = False


def load_env_file(path: Path) -> dict[str, str]:
    """Parse .env file.

    Handles:
        - KEY=VALUE format
        - Comments (lines starting with #)
        - Blank lines
        - Quoted values

    Args:
        path: Path to .env file

    Returns:
        Dictionary of environment variables
    """
    env_vars: dict[str, str] = {}

    if not path.exists():
        return env_vars

    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()

                if value and value[0] in ('"', "'") and value[-1] == value[0]:
                    value = value[1:-1]

                if key:
                    env_vars[key] = value

    return env_vars


def _get_path(key: str, default: Path, env_vars: dict[str, str]) -> Path:
    """Get path from environment, expanding ~ and resolving."""
    value = os.environ.get(key) or env_vars.get(key)
    if value:
        return Path(value).expanduser().resolve()
    return default


def _get_str(key: str, env_vars: dict[str, str]) -> Optional[str]:
    """Get string from environment."""
    return os.environ.get(key) or env_vars.get(key) or None


def _get_bool(key: str, default: bool, env_vars: dict[str, str]) -> bool:
    """Get boolean from environment."""
    value = os.environ.get(key) or env_vars.get(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _get_int(key: str, default: int, env_vars: dict[str, str]) -> int:
    """Get integer from environment.

    Raises:
        ConfigurationError: If the value is not an integer
    """
    value = os.environ.get(key) or env_vars.get(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}")


def _get_float(key: str, default: float, env_vars: dict[str, str]) -> float:
    """Get float from environment.

    Raises:
        ConfigurationError: If the value is not a number
    """
    value = os.environ.get(key) or env_vars.get(key)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {value!r}")


def load_config(env_file: Optional[Path] = None) -> Config:
    """Load configuration from environment and .env file.

    Priority:
        1. Environment variables (highest)
        2. .env file
        3. Default values (lowest)

    Args:
        env_file: Path to .env file. Defaults to .env in current directory.

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If a numeric setting cannot be parsed
    """
    if env_file is None:
        env_file = Path.cwd() / ".env"

    env_vars = load_env_file(Path(env_file))

    return Config(
        log_path=_get_path("STYLESYNC_LOG_PATH", DEFAULT_LOG_PATH, env_vars),
        claude_api_key=(
            _get_str("CLAUDE_API_KEY", env_vars) or _get_str("ANTHROPIC_API_KEY", env_vars)
        ),
        claude_model=_get_str("STYLESYNC_CLAUDE_MODEL", env_vars) or CLAUDE_MODEL,
        request_timeout=_get_float(
            "STYLESYNC_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT, env_vars
        ),
        history_window=_get_int("STYLESYNC_HISTORY_WINDOW", DEFAULT_HISTORY_WINDOW, env_vars),
        demo_delay=_get_float("STYLESYNC_DEMO_DELAY", DEFAULT_DEMO_DELAY, env_vars),
        debug=_get_bool("STYLESYNC_DEBUG", False, env_vars),
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration.

    Checks:
        - Log directory exists or can be created, and is writable
        - Numeric settings are in range
        - Demo mode is noted when no API key is set

    Args:
        config: Configuration to validate

    Returns:
        List of issues (empty if valid)
    """
    issues: list[str] = []

    try:
        config.log_path.mkdir(parents=True, exist_ok=True)
        if not os.access(config.log_path, os.W_OK):
            issues.append(f"Log directory not writable: {config.log_path}")
    except OSError as e:
        issues.append(f"Cannot create log directory {config.log_path}: {e}")

    if config.history_window < 1:
        issues.append(
            f"CRITICAL: STYLESYNC_HISTORY_WINDOW must be at least 1, got {config.history_window}"
        )
    if config.request_timeout <= 0:
        issues.append(
            f"CRITICAL: STYLESYNC_REQUEST_TIMEOUT must be positive, got {config.request_timeout}"
        )
    if config.demo_delay < 0:
        issues.append(f"STYLESYNC_DEMO_DELAY is negative ({config.demo_delay}), treated as 0")

    if not config.claude_api_key:
        issues.append("CLAUDE_API_KEY not set: running in demo mode with simulated responses")

    return issues


# Singleton config
_config: Optional[Config] = None


def get_config() -> Config:
    """Return cached configuration singleton.

    Loads configuration on first call, returns cached version thereafter.

    Returns:
        Application configuration
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset cached configuration.

    Used primarily for testing.
    """
    global _config
    _config = None
