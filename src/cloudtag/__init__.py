"""Cloudtag - cross-provider resource tag manager.

Uniform add/list/get/remove/find over tags on virtual machines, disks and
managed clusters, whichever cloud holds them.

Key Components:
    - domain: tag value objects, exceptions and the resource accessor port
    - application: kind registry, operation waiter and TagManager
    - providers: gcp, aws and in-memory mock accessors
    - config: pydantic configuration and loading
    - infrastructure: structured logging and the provider registry
"""

__version__ = "1.0.0"

from cloudtag.application.tag import (
    OperationWaiter,
    ResourceKindRegistry,
    TagManager,
    create_tag_manager,
)
from cloudtag.domain.tag import (
    ResourceIdentity,
    ResourceKind,
    Tag,
    TagMatch,
)

__all__ = [
    "TagManager",
    "ResourceKindRegistry",
    "OperationWaiter",
    "create_tag_manager",
    "ResourceKind",
    "ResourceIdentity",
    "Tag",
    "TagMatch",
]
