"""Configuration schemas."""

from .app_schema import AppConfig
from .logging_schema import LoggingConfig
from .provider_schema import (
    AWSProviderConfig,
    GCPProviderConfig,
    MockProviderConfig,
    ProviderConfig,
)
from .waiter_schema import WaiterConfig

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "ProviderConfig",
    "GCPProviderConfig",
    "AWSProviderConfig",
    "MockProviderConfig",
    "WaiterConfig",
]
