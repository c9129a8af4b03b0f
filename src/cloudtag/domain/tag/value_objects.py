"""Tag domain value objects.

All value objects are immutable pydantic models. Tag maps are carried as plain
dictionaries and are always copied at the boundaries, so a snapshot handed out
by an accessor can never be mutated by another caller.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ValueObject(BaseModel):
    """Base class for immutable value objects."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class ResourceKind(str, Enum):
    """Resource types known to the driver framework.

    A provider binds only a subset of these; see ResourceKindRegistry.
    """

    VPC = "VPC"
    SUBNET = "SUBNET"
    SECURITY_GROUP = "SG"
    KEYPAIR = "KEY"
    VM = "VM"
    NLB = "NLB"
    DISK = "DISK"
    MYIMAGE = "MYIMAGE"
    CLUSTER = "CLUSTER"


class OperationStatus(str, Enum):
    """Status of an asynchronous provider operation."""

    PENDING = "PENDING"
    DONE = "DONE"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self is not OperationStatus.PENDING


class MutationState(str, Enum):
    """Progress of a single mutating tag call."""

    VALIDATED = "validated"
    FETCHED = "fetched"
    COMPUTED = "computed"
    SUBMITTED = "submitted"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


class ResourceIdentity(ValueObject):
    """Name and provider-assigned id of a resource.

    The system id is what provider calls use; the name id is only for
    external addressing.
    """

    name_id: str = ""
    system_id: str = ""

    @property
    def is_resolved(self) -> bool:
        return bool(self.system_id)

    def __str__(self) -> str:
        if self.name_id and self.name_id != self.system_id:
            return f"{self.name_id} ({self.system_id})"
        return self.system_id or self.name_id


class Tag(ValueObject):
    """A single key/value tag. ``Tag()`` is the zero value."""

    key: str = ""
    value: str = ""

    @field_validator("key", "value", mode="before")
    @classmethod
    def coerce_to_str(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    def is_empty(self) -> bool:
        return not self.key


class TagMatch(ValueObject):
    """A tag found by keyword search together with its owning resource."""

    kind: ResourceKind
    identity: ResourceIdentity
    tag: Tag


class ResourceSnapshot(ValueObject):
    """Point-in-time view of a resource's tags as returned by an accessor.

    ``token`` is the optimistic-concurrency guard (None when the provider has
    none). ``reference`` is an optional provider-native handle needed by the
    paired write, e.g. an ARN or a fully qualified cluster path.
    """

    identity: ResourceIdentity
    tags: Dict[str, str] = Field(default_factory=dict)
    token: Optional[str] = None
    reference: Optional[str] = None

    @field_validator("tags", mode="before")
    @classmethod
    def copy_tags(cls, v: Any) -> Dict[str, str]:
        if v is None:
            return {}
        return {str(k): "" if val is None else str(val) for k, val in dict(v).items()}

    def tag_list(self) -> list:
        """Tags as a list of Tag objects."""
        return [Tag(key=k, value=v) for k, v in self.tags.items()]


class OperationHandle(ValueObject):
    """Reference to an asynchronous provider-side mutation."""

    name: str
    status: OperationStatus = OperationStatus.PENDING
    error: Optional[Any] = None
    reference: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal
