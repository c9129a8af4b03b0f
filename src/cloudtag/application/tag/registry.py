"""Resource type registry - the closed set of kinds a provider binds."""

from types import MappingProxyType
from typing import FrozenSet, Iterable, Iterator, Mapping, Union

from cloudtag.domain.base.ports import ResourceAccessorPort
from cloudtag.domain.tag.exceptions import UnsupportedKindError
from cloudtag.domain.tag.value_objects import ResourceKind

KindLike = Union[ResourceKind, str]


class ResourceKindRegistry:
    """
    Maps each supported ResourceKind to its accessor.

    The set of kinds is fixed at construction; there is no way to register
    a kind afterwards. Validation is local and makes no provider call.
    """

    def __init__(self, accessors: Iterable[ResourceAccessorPort]):
        bound = {}
        for accessor in accessors:
            kind = accessor.kind
            if kind in bound:
                raise ValueError(f"Resource kind '{kind.value}' is already bound")
            bound[kind] = accessor
        self._accessors: Mapping[ResourceKind, ResourceAccessorPort] = MappingProxyType(bound)

    @property
    def supported_kinds(self) -> FrozenSet[ResourceKind]:
        return frozenset(self._accessors)

    def validate(self, kind: KindLike) -> ResourceKind:
        """Return ``kind`` as a ResourceKind or raise UnsupportedKindError."""
        try:
            resolved = ResourceKind(kind)
        except (ValueError, TypeError):
            raise UnsupportedKindError(kind) from None
        if resolved not in self._accessors:
            raise UnsupportedKindError(resolved)
        return resolved

    def accessor_for(self, kind: KindLike) -> ResourceAccessorPort:
        return self._accessors[self.validate(kind)]

    def __contains__(self, kind: object) -> bool:
        try:
            return ResourceKind(kind) in self._accessors
        except (ValueError, TypeError):
            return False

    def __iter__(self) -> Iterator[ResourceKind]:
        return iter(self._accessors)

    def __len__(self) -> int:
        return len(self._accessors)
