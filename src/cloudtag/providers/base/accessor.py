"""Base resource accessor with functionality shared by every provider."""

from typing import Dict, Mapping, Optional

from cloudtag.domain.base.ports import ResourceAccessorPort
from cloudtag.domain.tag.exceptions import ProviderError, ResourceNotFoundError
from cloudtag.domain.tag.value_objects import OperationHandle, ResourceIdentity
from cloudtag.infrastructure.logging.logger import get_logger


class BaseResourceAccessor(ResourceAccessorPort):
    """Base class for provider accessors."""

    #: Human readable resource name used in errors and logs.
    resource_type: str = "resource"

    def __init__(self, logger=None):
        self._logger = logger or get_logger(type(self).__module__)

    def _resource_id(self, identity: ResourceIdentity) -> str:
        """Return the system id used for provider calls."""
        if not identity.is_resolved:
            raise ResourceNotFoundError(self.resource_type, identity.name_id or "<empty>")
        return identity.system_id

    @staticmethod
    def _copy_tags(tags: Optional[Mapping[str, str]]) -> Dict[str, str]:
        return dict(tags or {})

    def get_operation(self, handle: OperationHandle) -> OperationHandle:
        """Providers that complete writes synchronously never hand out handles."""
        raise ProviderError(
            f"{self.resource_type} writes are synchronous; unknown operation {handle.name}"
        )
