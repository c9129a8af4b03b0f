"""Configuration package."""

from .manager import ConfigurationManager
from .schemas import (
    AppConfig,
    AWSProviderConfig,
    GCPProviderConfig,
    LoggingConfig,
    MockProviderConfig,
    ProviderConfig,
    WaiterConfig,
)

__all__ = [
    "ConfigurationManager",
    "AppConfig",
    "ProviderConfig",
    "GCPProviderConfig",
    "AWSProviderConfig",
    "MockProviderConfig",
    "WaiterConfig",
    "LoggingConfig",
]
