"""In-memory mock provider."""

from .accessors import MockClusterAccessor, MockDiskAccessor, MockResourceAccessor, MockVMAccessor
from .cloud import InMemoryCloud
from .registration import create_mock_registry

__all__ = [
    "InMemoryCloud",
    "MockResourceAccessor",
    "MockVMAccessor",
    "MockDiskAccessor",
    "MockClusterAccessor",
    "create_mock_registry",
]
