"""Unit tests for tag value objects and exceptions."""

import pytest
from pydantic import ValidationError

from cloudtag.domain.tag import (
    ConcurrencyConflictError,
    MutationOutcome,
    OperationHandle,
    OperationStatus,
    OperationTimeoutError,
    ResourceIdentity,
    ResourceKind,
    ResourceSnapshot,
    Tag,
    UnsupportedKindError,
)


@pytest.mark.unit
class TestTag:
    def test_zero_value_is_empty(self):
        assert Tag() == Tag(key="", value="")
        assert Tag().is_empty()

    def test_none_is_coerced_to_empty_string(self):
        tag = Tag(key="env", value=None)
        assert tag.value == ""
        assert not tag.is_empty()

    def test_is_immutable(self):
        tag = Tag(key="env", value="prod")
        with pytest.raises(ValidationError):
            tag.value = "dev"

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            Tag(key="env", value="prod", owner="alice")


@pytest.mark.unit
class TestResourceIdentity:
    def test_unresolved_without_system_id(self):
        assert not ResourceIdentity(name_id="web-01").is_resolved
        assert ResourceIdentity(system_id="i-123").is_resolved

    def test_str_shows_both_ids_when_they_differ(self):
        assert str(ResourceIdentity(name_id="web-01", system_id="i-123")) == "web-01 (i-123)"
        assert str(ResourceIdentity(name_id="vm-1", system_id="vm-1")) == "vm-1"


@pytest.mark.unit
class TestResourceSnapshot:
    def test_tags_are_copied_on_construction(self):
        source = {"env": "prod"}
        snapshot = ResourceSnapshot(identity=ResourceIdentity(system_id="vm-1"), tags=source)

        source["env"] = "dev"

        assert snapshot.tags == {"env": "prod"}

    def test_tag_list(self):
        snapshot = ResourceSnapshot(
            identity=ResourceIdentity(system_id="vm-1"), tags={"env": "prod", "team": None}
        )
        assert set(snapshot.tag_list()) == {Tag(key="env", value="prod"), Tag(key="team", value="")}

    def test_none_tags_become_empty_map(self):
        snapshot = ResourceSnapshot(identity=ResourceIdentity(system_id="vm-1"), tags=None)
        assert snapshot.tags == {}


@pytest.mark.unit
def test_operation_handle_terminal_states():
    assert not OperationHandle(name="op").is_terminal
    assert OperationHandle(name="op", status=OperationStatus.DONE).is_terminal
    assert OperationHandle(name="op", status=OperationStatus.FAILED).is_terminal


@pytest.mark.unit
def test_resource_kind_uses_driver_names():
    assert ResourceKind("SG") is ResourceKind.SECURITY_GROUP
    assert ResourceKind("KEY") is ResourceKind.KEYPAIR
    assert len(ResourceKind) == 9


@pytest.mark.unit
def test_errors_report_mutation_outcome():
    assert UnsupportedKindError(ResourceKind.VPC).mutation is MutationOutcome.NOT_APPLIED
    assert ConcurrencyConflictError("stale").mutation is MutationOutcome.CONFLICT
    assert OperationTimeoutError("op-1", 3).mutation is MutationOutcome.UNKNOWN
    assert "VPC" in str(UnsupportedKindError(ResourceKind.VPC))
