"""In-memory cloud used by the mock provider.

Each resource keeps a version counter that is exposed as its concurrency
token. Writes can complete immediately or through an operation that finishes
after a configurable number of status polls. An accepted write advances the
version at once, and a resource with a pending operation rejects further
writes, so of two writers holding the same token only the first succeeds.
"""

import itertools
import threading
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from cloudtag.domain.tag.exceptions import ConcurrencyConflictError, ResourceNotFoundError
from cloudtag.domain.tag.value_objects import (
    OperationHandle,
    OperationStatus,
    ResourceIdentity,
    ResourceKind,
)


@dataclass
class _Record:
    identity: ResourceIdentity
    tags: Dict[str, str] = field(default_factory=dict)
    version: int = 1
    pending: Optional[str] = None


@dataclass
class _Operation:
    kind: ResourceKind
    system_id: str
    tags: Dict[str, str]
    remaining_polls: int
    fail: bool
    status: OperationStatus = OperationStatus.PENDING


class InMemoryCloud:
    """Thread-safe in-memory store of taggable resources."""

    def __init__(self, operation_polls: int = 0, fail_operations: bool = False):
        """
        Args:
            operation_polls: Status polls before a write completes; 0 applies
                writes immediately without an operation
            fail_operations: Make every write end in a failed operation
        """
        self.operation_polls = operation_polls
        self.fail_operations = fail_operations
        self.calls: Counter = Counter()
        self._lock = threading.Lock()
        self._resources: Dict[ResourceKind, Dict[str, _Record]] = {}
        self._operations: Dict[str, _Operation] = {}
        self._op_ids = itertools.count(1)

    @property
    def call_count(self) -> int:
        return sum(self.calls.values())

    def add_resource(
        self, kind: ResourceKind, system_id: str, tags: Optional[Mapping[str, str]] = None,
        name_id: Optional[str] = None,
    ) -> ResourceIdentity:
        """Create a resource directly, without counting a provider call."""
        identity = ResourceIdentity(name_id=name_id or system_id, system_id=system_id)
        with self._lock:
            self._resources.setdefault(kind, {})[system_id] = _Record(identity, dict(tags or {}))
        return identity

    def _record(self, kind: ResourceKind, system_id: str) -> _Record:
        record = self._resources.get(kind, {}).get(system_id)
        if record is None:
            raise ResourceNotFoundError(kind.value, system_id)
        return record

    def read(self, kind: ResourceKind, system_id: str) -> Tuple[ResourceIdentity, Dict[str, str], str]:
        with self._lock:
            self.calls["read"] += 1
            record = self._record(kind, system_id)
            return record.identity, dict(record.tags), str(record.version)

    def write(
        self, kind: ResourceKind, system_id: str, tags: Mapping[str, str], token: Optional[str]
    ) -> Optional[OperationHandle]:
        with self._lock:
            self.calls["write"] += 1
            record = self._record(kind, system_id)
            if token != str(record.version):
                raise ConcurrencyConflictError(
                    f"token {token} is stale for {kind.value} {system_id}, current is {record.version}"
                )
            if record.pending is not None:
                raise ConcurrencyConflictError(
                    f"{kind.value} {system_id} has operation {record.pending} in progress"
                )

            if self.operation_polls == 0 and not self.fail_operations:
                self._apply(record, tags)
                return None

            name = f"operation-{next(self._op_ids)}"
            operation = _Operation(
                kind=kind,
                system_id=system_id,
                tags=dict(tags),
                remaining_polls=self.operation_polls,
                fail=self.fail_operations,
            )
            self._operations[name] = operation
            record.version += 1
            record.pending = name
            self._advance(operation)
            return self._handle(name, operation)

    def get_operation(self, name: str) -> OperationHandle:
        with self._lock:
            self.calls["get_operation"] += 1
            operation = self._operations.get(name)
            if operation is None:
                raise ResourceNotFoundError("operation", name)
            if operation.status is OperationStatus.PENDING:
                operation.remaining_polls -= 1
                self._advance(operation)
            return self._handle(name, operation)

    def list_resources(self, kind: ResourceKind) -> List[Tuple[ResourceIdentity, Dict[str, str], str]]:
        with self._lock:
            self.calls["list"] += 1
            return [
                (record.identity, dict(record.tags), str(record.version))
                for record in self._resources.get(kind, {}).values()
            ]

    def _advance(self, operation: _Operation) -> None:
        if operation.remaining_polls > 0:
            return
        record = self._record(operation.kind, operation.system_id)
        record.pending = None
        if operation.fail:
            operation.status = OperationStatus.FAILED
            return
        # version already advanced when the write was accepted
        record.tags = dict(operation.tags)
        operation.status = OperationStatus.DONE

    @staticmethod
    def _apply(record: _Record, tags: Mapping[str, str]) -> None:
        record.tags = dict(tags)
        record.version += 1

    @staticmethod
    def _handle(name: str, operation: _Operation) -> OperationHandle:
        error = None
        if operation.status is OperationStatus.FAILED:
            error = {"code": "SIMULATED_FAILURE", "message": f"labels of {operation.system_id} not updated"}
        return OperationHandle(name=name, status=operation.status, error=error)
