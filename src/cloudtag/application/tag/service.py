"""Tag manager - uniform tag CRUD over heterogeneous provider resources."""

from typing import Callable, Dict, List, Optional, Union

from cloudtag.application.tag.registry import KindLike, ResourceKindRegistry
from cloudtag.application.tag.waiter import Deadline, OperationWaiter
from cloudtag.domain.tag.exceptions import (
    InvalidTagError,
    OperationFailedError,
    OperationTimeoutError,
    TagManagerError,
)
from cloudtag.domain.tag.value_objects import (
    MutationState,
    ResourceIdentity,
    Tag,
    TagMatch,
)
from cloudtag.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

IdentityLike = Union[ResourceIdentity, str]
TagChange = Callable[[Dict[str, str]], None]


def _as_identity(identity: IdentityLike) -> ResourceIdentity:
    if isinstance(identity, ResourceIdentity):
        return identity
    return ResourceIdentity(name_id=identity, system_id=identity)


class TagManager:
    """
    Add, list, get, remove and find tags on provider resources.

    Every mutating call is a single read-modify-write:
    validate kind -> fetch snapshot -> compute new map -> set tags with the
    snapshot's token -> wait for the provider operation, if any.
    Nothing is cached between calls; the provider is the system of record.
    """

    def __init__(
        self,
        registry: ResourceKindRegistry,
        waiter: Optional[OperationWaiter] = None,
        default_timeout: Optional[float] = None,
    ):
        """
        Args:
            registry: Supported kinds and their accessors
            waiter: Waiter for asynchronous operations
            default_timeout: Deadline in seconds applied when a call passes none
        """
        self.registry = registry
        self.waiter = waiter or OperationWaiter()
        self.default_timeout = default_timeout

    def add_tag(
        self, kind: KindLike, identity: IdentityLike, tag: Tag, timeout: Optional[float] = None
    ) -> Tag:
        """
        Insert or overwrite ``tag.key`` on the resource.

        A full round trip is made even when the value is unchanged.

        Raises:
            UnsupportedKindError: Kind is not bound; no provider call is made
            InvalidTagError: Tag key is empty
            ConcurrencyConflictError: Resource changed since it was fetched
            OperationFailedError: Provider reported failure
            OperationTimeoutError: Outcome unknown
        """
        kind = self.registry.validate(kind)
        if tag.is_empty():
            raise InvalidTagError("tag key must not be empty")

        def apply(tags: Dict[str, str]) -> None:
            tags[tag.key] = tag.value

        self._mutate("add_tag", kind, _as_identity(identity), apply, timeout)
        return tag

    def list_tag(self, kind: KindLike, identity: IdentityLike) -> List[Tag]:
        """Return every tag on the resource, in no particular order."""
        accessor = self.registry.accessor_for(kind)
        snapshot = accessor.fetch(_as_identity(identity))
        return snapshot.tag_list()

    def get_tag(self, kind: KindLike, identity: IdentityLike, key: str) -> Tag:
        """Return the tag for ``key``, or the empty Tag() when it is absent."""
        for tag in self.list_tag(kind, identity):
            if tag.key == key:
                return tag
        return Tag()

    def remove_tag(
        self, kind: KindLike, identity: IdentityLike, key: str, timeout: Optional[float] = None
    ) -> bool:
        """
        Delete ``key`` from the resource.

        Removing an absent key still writes the unchanged map and returns True.
        """
        kind = self.registry.validate(kind)

        def apply(tags: Dict[str, str]) -> None:
            tags.pop(key, None)

        self._mutate("remove_tag", kind, _as_identity(identity), apply, timeout)
        return True

    def find_tag(self, kind: KindLike, keyword: str) -> List[TagMatch]:
        """
        Search every resource of ``kind`` in scope for tags whose key or value
        contains ``keyword``. One TagMatch is returned per matching tag.
        """
        kind = self.registry.validate(kind)
        accessor = self.registry.accessor_for(kind)

        matches = []
        snapshots = accessor.list_resources()
        for snapshot in snapshots:
            for key, value in snapshot.tags.items():
                if keyword in key or keyword in value:
                    matches.append(
                        TagMatch(kind=kind, identity=snapshot.identity, tag=Tag(key=key, value=value))
                    )

        logger.debug(
            "Tag search finished",
            kind=kind.value,
            keyword=keyword,
            resources=len(snapshots),
            matches=len(matches),
        )
        return matches

    def _mutate(
        self,
        operation: str,
        kind: KindLike,
        identity: ResourceIdentity,
        change: TagChange,
        timeout: Optional[float],
    ) -> None:
        log = logger.bind(operation=operation, kind=getattr(kind, "value", kind), resource=str(identity))
        accessor = self.registry.accessor_for(kind)
        state = MutationState.VALIDATED
        log.debug("Tag mutation state", state=state.value)

        effective_timeout = timeout if timeout is not None else self.default_timeout
        deadline = Deadline.after(effective_timeout, self.waiter.clock)

        try:
            snapshot = accessor.fetch(identity)
            state = MutationState.FETCHED
            log.debug("Tag mutation state", state=state.value, token=snapshot.token)

            new_tags = dict(snapshot.tags)
            change(new_tags)
            state = MutationState.COMPUTED
            log.debug("Tag mutation state", state=state.value, tag_count=len(new_tags))

            handle = accessor.set_tags(snapshot, dict(new_tags))
            state = MutationState.SUBMITTED
            log.debug(
                "Tag mutation state",
                state=state.value,
                operation_name=handle.name if handle else None,
            )

            if handle is not None:
                self.waiter.wait(handle, accessor.get_operation, deadline)
        except OperationTimeoutError:
            log.warning("Tag mutation outcome unknown", state=MutationState.TIMED_OUT.value)
            raise
        except OperationFailedError as e:
            log.error("Tag mutation failed", state=MutationState.FAILED.value, detail=e.detail)
            raise
        except TagManagerError as e:
            log.error(
                "Tag mutation failed",
                state=MutationState.FAILED.value,
                after=state.value,
                error=str(e),
                mutation=e.mutation.value,
            )
            raise

        log.info("Tag mutation completed", state=MutationState.COMPLETED.value)
