"""Mapping of GCP operation resources to OperationHandle."""

from typing import Any, Dict

from cloudtag.domain.tag.value_objects import OperationHandle, OperationStatus


def to_operation_handle(operation: Dict[str, Any]) -> OperationHandle:
    """
    Build a handle from a compute zone operation or a GKE operation.

    Both report ``status`` DONE when finished; a DONE operation carrying an
    ``error`` failed. Compute nests details under ``error.errors``.
    """
    name = operation.get("name", "")
    status = str(operation.get("status", "")).upper()
    error = operation.get("error")

    if status != "DONE":
        return OperationHandle(name=name, status=OperationStatus.PENDING, reference=operation.get("selfLink"))

    if error:
        detail = error.get("errors", error) if isinstance(error, dict) else error
        return OperationHandle(
            name=name, status=OperationStatus.FAILED, error=detail, reference=operation.get("selfLink")
        )
    return OperationHandle(name=name, status=OperationStatus.DONE, reference=operation.get("selfLink"))
