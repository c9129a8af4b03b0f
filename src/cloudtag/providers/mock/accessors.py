"""Mock provider accessors backed by InMemoryCloud."""

from typing import List, Mapping, Optional

from cloudtag.domain.tag.value_objects import (
    OperationHandle,
    ResourceIdentity,
    ResourceKind,
    ResourceSnapshot,
)
from cloudtag.providers.base import BaseResourceAccessor
from cloudtag.providers.mock.cloud import InMemoryCloud


class MockResourceAccessor(BaseResourceAccessor):
    """Accessor for one kind of in-memory resource."""

    def __init__(self, cloud: InMemoryCloud, logger=None):
        super().__init__(logger)
        self.cloud = cloud

    def fetch(self, identity: ResourceIdentity) -> ResourceSnapshot:
        resource_id = self._resource_id(identity)
        stored_identity, tags, token = self.cloud.read(self.kind, resource_id)
        return ResourceSnapshot(identity=stored_identity, tags=tags, token=token)

    def set_tags(
        self, snapshot: ResourceSnapshot, tags: Mapping[str, str]
    ) -> Optional[OperationHandle]:
        resource_id = self._resource_id(snapshot.identity)
        return self.cloud.write(self.kind, resource_id, self._copy_tags(tags), snapshot.token)

    def get_operation(self, handle: OperationHandle) -> OperationHandle:
        return self.cloud.get_operation(handle.name)

    def list_resources(self) -> List[ResourceSnapshot]:
        return [
            ResourceSnapshot(identity=identity, tags=tags, token=token)
            for identity, tags, token in self.cloud.list_resources(self.kind)
        ]


class MockVMAccessor(MockResourceAccessor):
    kind = ResourceKind.VM
    resource_type = "VM"


class MockDiskAccessor(MockResourceAccessor):
    kind = ResourceKind.DISK
    resource_type = "Disk"


class MockClusterAccessor(MockResourceAccessor):
    kind = ResourceKind.CLUSTER
    resource_type = "Cluster"
