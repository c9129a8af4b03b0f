"""Mock provider registration."""

from typing import TYPE_CHECKING, Optional

from cloudtag.application.tag.registry import ResourceKindRegistry
from cloudtag.providers.mock.accessors import MockClusterAccessor, MockDiskAccessor, MockVMAccessor
from cloudtag.providers.mock.cloud import InMemoryCloud

if TYPE_CHECKING:
    from cloudtag.config.schemas import AppConfig


def create_mock_registry(
    config: Optional["AppConfig"] = None, cloud: Optional[InMemoryCloud] = None
) -> ResourceKindRegistry:
    """Bind VM, DISK and CLUSTER to an in-memory cloud."""
    if cloud is None:
        operation_polls = config.provider.mock.operation_polls if config is not None else 0
        cloud = InMemoryCloud(operation_polls=operation_polls)
    return ResourceKindRegistry(
        [MockVMAccessor(cloud), MockDiskAccessor(cloud), MockClusterAccessor(cloud)]
    )
