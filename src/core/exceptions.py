"""StyleSync Exception Hierarchy.

All custom exceptions inherit from StyleSyncError.
InferenceError is the only error the AI clients raise internally,
and they always recover from it with a fallback result.

Exception Hierarchy:
    StyleSyncError (base)
    ├── ConfigurationError
    ├── ValidationError
    ├── IntegrationError
    │   └── InferenceError
    └── ImportError_
"""


class StyleSyncError(Exception):
    """Base exception for all StyleSync errors.

    All custom exceptions in StyleSync inherit from this class,
    allowing for broad exception handling when needed.
    """

    pass


class ConfigurationError(StyleSyncError):
    """Configuration is invalid or missing.

    Raised when:
        - A numeric environment variable cannot be parsed
        - A configured value is out of range
        - A required service is asked for but not configured
    """

    pass


class ValidationError(StyleSyncError):
    """Data validation failed.

    Raised when:
        - A style score is outside 0-100
        - A style payload is missing fields
    """

    pass


class IntegrationError(StyleSyncError):
    """External integration failed.

    Base class for integration-specific errors.
    """

    pass


class InferenceError(IntegrationError):
    """Claude inference call failed.

    Raised when:
        - The API call fails (network, quota, auth)
        - The reply is empty
        - The reply cannot be parsed into the expected shape

    Never reaches the orchestrator: both AI clients catch it
    and fall back to demo output.
    """

    pass


class ImportError_(StyleSyncError):
    """Transcript import was rejected.

    Named with underscore to avoid shadowing builtin ImportError.

    Raised when:
        - Contact name is blank
        - Transcript text is blank
    """

    pass
