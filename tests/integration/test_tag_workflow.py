"""End-to-end tag workflow from a configuration file to the in-memory provider."""

import pytest
import yaml

from cloudtag import ResourceKind, Tag, create_tag_manager
from cloudtag.config import ConfigurationManager
from cloudtag.domain.tag import OperationTimeoutError
from cloudtag.providers.mock import InMemoryCloud, create_mock_registry


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "cloudtag.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "provider": {"type": "mock", "mock": {"operation_polls": 2}},
                "waiter": {"poll_interval": 0.01, "max_attempts": 3},
            }
        )
    )
    return str(path)


@pytest.mark.integration
def test_configured_manager_runs_full_workflow(config_file):
    config = ConfigurationManager(config_file=config_file).app_config
    cloud = InMemoryCloud(operation_polls=config.provider.mock.operation_polls)
    web = cloud.add_resource(ResourceKind.VM, "vm-web", {"env": "prod"})
    db = cloud.add_resource(ResourceKind.VM, "vm-db", {"env": "staging"})
    cloud.add_resource(ResourceKind.VM, "vm-batch", {"tier": "production"})

    manager = create_tag_manager(
        config, kind_registry=create_mock_registry(config, cloud=cloud), configure_logging=False
    )

    manager.add_tag(ResourceKind.VM, db, Tag(key="owner", value="dba"))
    manager.remove_tag(ResourceKind.VM, web, "env")

    assert manager.list_tag(ResourceKind.VM, web) == []
    assert manager.get_tag(ResourceKind.VM, db, "owner").value == "dba"
    assert {m.identity.system_id for m in manager.find_tag(ResourceKind.VM, "prod")} == {"vm-batch"}
    assert cloud.calls["get_operation"] == 4


@pytest.mark.integration
def test_operation_slower_than_budget_has_unknown_outcome(config_file):
    config = ConfigurationManager(config_file=config_file).app_config
    cloud = InMemoryCloud(operation_polls=10)
    vm = cloud.add_resource(ResourceKind.VM, "vm-01")
    manager = create_tag_manager(
        config, kind_registry=create_mock_registry(config, cloud=cloud), configure_logging=False
    )

    with pytest.raises(OperationTimeoutError):
        manager.add_tag(ResourceKind.VM, vm, Tag(key="team", value="core"))

    # the write is still in flight; re-querying shows it has not landed
    assert manager.get_tag(ResourceKind.VM, vm, "team") == Tag()
