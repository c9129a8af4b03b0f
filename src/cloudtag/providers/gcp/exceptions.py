"""Translation of GCP client errors into tag domain errors."""

from typing import Optional

import httplib2
from google.auth.exceptions import TransportError
from googleapiclient.errors import HttpError

from cloudtag.domain.tag.exceptions import (
    ConcurrencyConflictError,
    InvalidTagError,
    PermissionDeniedError,
    ProviderError,
    ResourceNotFoundError,
    TagManagerError,
    TransientNetworkError,
)

TRANSPORT_ERRORS = (TransportError, httplib2.HttpLib2Error, ConnectionError, TimeoutError)


def _status_of(error: HttpError) -> Optional[int]:
    status = getattr(error, "status_code", None)
    if status is None and getattr(error, "resp", None) is not None:
        status = getattr(error.resp, "status", None)
    try:
        return int(status) if status is not None else None
    except (TypeError, ValueError):
        return None


def _reason_of(error: HttpError) -> str:
    reason = getattr(error, "reason", None)
    return reason or str(error)


def translate_gcp_error(error: Exception, resource_type: str, resource_id: str) -> TagManagerError:
    """Convert a googleapiclient or transport error to a TagManagerError."""
    if isinstance(error, HttpError):
        status = _status_of(error)
        reason = _reason_of(error)

        if status == 404:
            return ResourceNotFoundError(resource_type, resource_id, details=reason)
        if status in (401, 403):
            return PermissionDeniedError(f"Permission denied for {resource_type} {resource_id}: {reason}")
        # Label fingerprint mismatch is reported as conditionNotMet
        if status == 412:
            return ConcurrencyConflictError(
                f"{resource_type} {resource_id} labels changed since they were read: {reason}"
            )
        if status == 400:
            return InvalidTagError(f"Invalid labels for {resource_type} {resource_id}: {reason}")
        if status == 429 or (status is not None and status >= 500):
            return TransientNetworkError(f"GCP returned {status} for {resource_type} {resource_id}: {reason}")
        return ProviderError(f"GCP error {status} for {resource_type} {resource_id}: {reason}")

    if isinstance(error, TRANSPORT_ERRORS):
        return TransientNetworkError(f"Network error calling GCP for {resource_type} {resource_id}: {error}")

    return ProviderError(f"Unexpected GCP error for {resource_type} {resource_id}: {error}")
