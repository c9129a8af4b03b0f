"""Unit tests for the provider registry and create_tag_manager."""

from unittest.mock import Mock

import pytest

from cloudtag.application.tag import TagManager, create_tag_manager
from cloudtag.application.tag.registry import ResourceKindRegistry
from cloudtag.config import AppConfig
from cloudtag.domain.tag import ResourceKind, Tag
from cloudtag.infrastructure.exceptions import UnsupportedProviderError
from cloudtag.infrastructure.registry import ProviderRegistry, get_provider_registry
from cloudtag.providers.aws import EC2InstanceAccessor
from cloudtag.providers.mock import MockVMAccessor


def _config(**provider):
    return AppConfig.from_dict({"provider": provider, "waiter": {"poll_interval": 0.1, "max_attempts": 3}})


@pytest.mark.unit
class TestProviderRegistry:
    def test_singleton(self):
        assert get_provider_registry() is ProviderRegistry.get_instance()

    def test_builtin_providers_registered(self):
        assert set(get_provider_registry().get_registered_providers()) == {"gcp", "aws", "mock"}

    def test_duplicate_registration_rejected(self):
        registry = get_provider_registry()
        with pytest.raises(ValueError, match="already registered"):
            registry.register_provider("mock", Mock())

    def test_register_and_unregister(self):
        registry = ProviderRegistry()
        factory = Mock(return_value=ResourceKindRegistry([]))

        registry.register_provider("custom", factory)
        assert registry.is_provider_registered("custom")
        kind_registry = registry.create_kind_registry("custom", _config(type="mock"))

        factory.assert_called_once()
        assert len(kind_registry) == 0
        assert registry.unregister_provider("custom") is True
        assert registry.unregister_provider("custom") is False

    def test_unknown_provider(self):
        with pytest.raises(UnsupportedProviderError, match="Available providers"):
            ProviderRegistry().create_kind_registry("azure", _config(type="mock"))

    def test_mock_binds_vm_disk_cluster(self):
        kind_registry = get_provider_registry().create_kind_registry("mock", _config(type="mock"))

        assert kind_registry.supported_kinds == frozenset(
            {ResourceKind.VM, ResourceKind.DISK, ResourceKind.CLUSTER}
        )
        assert isinstance(kind_registry.accessor_for(ResourceKind.VM), MockVMAccessor)

    def test_aws_binding_needs_no_network(self):
        kind_registry = get_provider_registry().create_kind_registry("aws", _config(type="aws"))
        assert isinstance(kind_registry.accessor_for(ResourceKind.VM), EC2InstanceAccessor)
        assert ResourceKind.VPC not in kind_registry


@pytest.mark.unit
class TestCreateTagManager:
    def test_builds_manager_from_config(self):
        config = AppConfig.from_dict(
            {
                "provider": {"type": "mock"},
                "waiter": {"poll_interval": 0.25, "max_attempts": 6},
                "request_timeout": 12,
            }
        )

        manager = create_tag_manager(config, configure_logging=False)

        assert isinstance(manager, TagManager)
        assert manager.waiter.poll_interval == 0.25
        assert manager.waiter.max_attempts == 6
        assert manager.default_timeout == 12.0

    def test_loads_configuration_when_none_given(self, monkeypatch):
        monkeypatch.setenv("CLOUDTAG_PROVIDER", "mock")
        monkeypatch.delenv("CLOUDTAG_CONFIG_FILE", raising=False)

        manager = create_tag_manager(configure_logging=False)

        assert manager.registry.supported_kinds == frozenset(
            {ResourceKind.VM, ResourceKind.DISK, ResourceKind.CLUSTER}
        )

    def test_explicit_kind_registry_bypasses_providers(self, cloud, kind_registry):
        vm = cloud.add_resource(ResourceKind.VM, "vm-01")
        manager = create_tag_manager(_config(type="mock"), kind_registry=kind_registry, configure_logging=False)

        manager.add_tag(ResourceKind.VM, vm, Tag(key="env", value="prod"))

        assert cloud.read(ResourceKind.VM, "vm-01")[1] == {"env": "prod"}
