"""Tag use cases - registry, operation waiter and tag manager."""

from .factory import create_tag_manager
from .registry import ResourceKindRegistry
from .service import TagManager
from .waiter import Deadline, OperationWaiter

__all__ = [
    "TagManager",
    "ResourceKindRegistry",
    "OperationWaiter",
    "Deadline",
    "create_tag_manager",
]
