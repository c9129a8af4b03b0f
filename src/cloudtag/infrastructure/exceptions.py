from typing import Optional, Any


class InfrastructureError(Exception):
    """Base exception for infrastructure-related errors."""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details


class ConfigurationError(InfrastructureError):
    """Raised when there's an issue with configuration."""
    pass


class UnsupportedProviderError(ConfigurationError):
    """Raised when an unsupported provider type is requested."""
    pass
