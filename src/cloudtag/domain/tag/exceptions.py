"""Tag domain exceptions."""

from enum import Enum
from typing import Any, Optional


class MutationOutcome(str, Enum):
    """What a failed call tells the caller about the resource's tags."""

    NOT_APPLIED = "not_applied"
    UNKNOWN = "unknown"
    CONFLICT = "conflict"


class TagManagerError(Exception):
    """Base exception for all tag manager errors."""

    mutation: MutationOutcome = MutationOutcome.UNKNOWN

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class UnsupportedKindError(TagManagerError):
    """Raised when a resource kind is not bound by the registry."""

    mutation = MutationOutcome.NOT_APPLIED

    def __init__(self, kind: Any):
        super().__init__(f"unsupported resource type: {getattr(kind, 'value', kind)}")
        self.kind = kind


class InvalidTagError(TagManagerError):
    """Raised when a tag is rejected locally or by the provider."""

    mutation = MutationOutcome.NOT_APPLIED


class ResourceNotFoundError(TagManagerError):
    """Raised when a resource identity does not resolve."""

    mutation = MutationOutcome.NOT_APPLIED

    def __init__(self, resource_type: str, resource_id: str, details: Any = None):
        super().__init__(f"{resource_type} with ID {resource_id} not found", details)
        self.resource_type = resource_type
        self.resource_id = resource_id


class PermissionDeniedError(TagManagerError):
    """Raised when the credentials may not read or write the resource."""

    mutation = MutationOutcome.NOT_APPLIED


class ConcurrencyConflictError(TagManagerError):
    """Raised when a write carried a stale concurrency token.

    Nothing was changed; re-fetch and retry.
    """

    mutation = MutationOutcome.CONFLICT


class OperationFailedError(TagManagerError):
    """Raised when the provider reports a terminal operation failure."""

    mutation = MutationOutcome.NOT_APPLIED

    def __init__(self, operation: str, detail: Any = None):
        super().__init__(f"operation {operation} failed: {detail}", detail)
        self.operation = operation
        self.detail = detail


class OperationTimeoutError(TagManagerError):
    """Raised when an operation is still pending after the wait budget.

    The operation is not cancelled; re-query the resource to learn the outcome.
    """

    mutation = MutationOutcome.UNKNOWN

    def __init__(self, operation: str, attempts: int, reason: Optional[str] = None):
        message = f"operation {operation} has not finished after {attempts} polls"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.operation = operation
        self.attempts = attempts


class TransientNetworkError(TagManagerError):
    """Raised for retryable transport or throttling failures. Not retried here."""

    mutation = MutationOutcome.UNKNOWN


class ProviderError(TagManagerError):
    """Raised for provider failures that map to no other category."""

    mutation = MutationOutcome.UNKNOWN
