"""Domain port for per-kind resource tag access."""

from abc import ABC, abstractmethod
from typing import ClassVar, List, Mapping, Optional

from cloudtag.domain.tag.value_objects import (
    OperationHandle,
    ResourceIdentity,
    ResourceKind,
    ResourceSnapshot,
)


class ResourceAccessorPort(ABC):
    """Capability set a provider exposes for one resource kind."""

    kind: ClassVar[ResourceKind]

    @abstractmethod
    def fetch(self, identity: ResourceIdentity) -> ResourceSnapshot:
        """Read the resource's current tags and concurrency token in one call."""

    @abstractmethod
    def set_tags(
        self, snapshot: ResourceSnapshot, tags: Mapping[str, str]
    ) -> Optional[OperationHandle]:
        """Replace the resource's tags, guarded by ``snapshot.token``.

        Returns None when the write completed immediately, or a handle to
        poll when the provider runs it asynchronously.
        """

    @abstractmethod
    def get_operation(self, handle: OperationHandle) -> OperationHandle:
        """Return the current status of an asynchronous operation."""

    @abstractmethod
    def list_resources(self) -> List[ResourceSnapshot]:
        """List every resource of this kind in the configured scope."""
