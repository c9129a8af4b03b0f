"""Tag domain - value objects and exceptions."""

from .exceptions import (
    ConcurrencyConflictError,
    InvalidTagError,
    MutationOutcome,
    OperationFailedError,
    OperationTimeoutError,
    PermissionDeniedError,
    ProviderError,
    ResourceNotFoundError,
    TagManagerError,
    TransientNetworkError,
    UnsupportedKindError,
)
from .value_objects import (
    MutationState,
    OperationHandle,
    OperationStatus,
    ResourceIdentity,
    ResourceKind,
    ResourceSnapshot,
    Tag,
    TagMatch,
)

__all__ = [
    "ResourceKind",
    "ResourceIdentity",
    "ResourceSnapshot",
    "Tag",
    "TagMatch",
    "OperationHandle",
    "OperationStatus",
    "MutationState",
    "MutationOutcome",
    "TagManagerError",
    "UnsupportedKindError",
    "InvalidTagError",
    "ResourceNotFoundError",
    "PermissionDeniedError",
    "ConcurrencyConflictError",
    "OperationFailedError",
    "OperationTimeoutError",
    "TransientNetworkError",
    "ProviderError",
]
