"""Core package - Configuration, logging, exceptions.

This package provides foundational infrastructure used by all other layers.

Modules:
    - config: Environment and configuration management
    - logging: Structured JSON logging
    - exceptions: Custom exception hierarchy
    - services: Claude availability / demo mode reporting
    - tasks: asyncio background task management
"""

from src.core.exceptions import (
    ConfigurationError,
    ImportError_,
    InferenceError,
    IntegrationError,
    StyleSyncError,
    ValidationError,
)

__all__ = [
    "StyleSyncError",
    "ConfigurationError",
    "ValidationError",
    "IntegrationError",
    "InferenceError",
    "ImportError_",
]
