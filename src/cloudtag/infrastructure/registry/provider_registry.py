"""Provider Registry - maps provider types to resource kind registry factories.

New providers are added by registering a factory; nothing here branches on
provider type.
"""

import threading
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from cloudtag.infrastructure.exceptions import UnsupportedProviderError
from cloudtag.infrastructure.logging.logger import get_logger

if TYPE_CHECKING:
    from cloudtag.application.tag.registry import ResourceKindRegistry
    from cloudtag.config.schemas import AppConfig

RegistryFactory = Callable[["AppConfig"], "ResourceKindRegistry"]


class ProviderRegistration:
    """Container for provider registration information."""

    def __init__(self, provider_type: str, registry_factory: RegistryFactory):
        """
        Initialize provider registration.

        Args:
            provider_type: Type identifier for the provider (e.g., 'gcp', 'aws')
            registry_factory: Builds the ResourceKindRegistry for the provider
        """
        self.provider_type = provider_type
        self.registry_factory = registry_factory


class ProviderRegistry:
    """
    Registry for provider factories.

    Thread-safe singleton implementation.
    """

    _instance: Optional["ProviderRegistry"] = None
    _lock = threading.RLock()

    def __init__(self):
        """Initialize provider registry."""
        self._registrations: Dict[str, ProviderRegistration] = {}
        self._logger = get_logger(__name__)
        self._registration_lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> "ProviderRegistry":
        """Get singleton instance of provider registry, with built-in providers registered."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    instance = cls()
                    register_builtin_providers(instance)
                    cls._instance = instance
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton. Used by tests."""
        with cls._lock:
            cls._instance = None

    def register_provider(self, provider_type: str, registry_factory: RegistryFactory) -> None:
        """
        Register a provider with its factory function.

        Raises:
            ValueError: If provider_type is already registered
        """
        with self._registration_lock:
            if provider_type in self._registrations:
                raise ValueError(f"Provider type '{provider_type}' is already registered")
            self._registrations[provider_type] = ProviderRegistration(provider_type, registry_factory)
            self._logger.debug("Registered provider", provider_type=provider_type)

    def unregister_provider(self, provider_type: str) -> bool:
        """
        Unregister a provider.

        Returns:
            True if provider was unregistered, False if not found
        """
        with self._registration_lock:
            if provider_type in self._registrations:
                del self._registrations[provider_type]
                self._logger.debug("Unregistered provider", provider_type=provider_type)
                return True
            return False

    def is_provider_registered(self, provider_type: str) -> bool:
        return provider_type in self._registrations

    def get_registered_providers(self) -> List[str]:
        return list(self._registrations.keys())

    def create_kind_registry(self, provider_type: str, config: "AppConfig") -> "ResourceKindRegistry":
        """
        Build the resource kind registry for ``provider_type``.

        Raises:
            UnsupportedProviderError: If provider type is not registered
        """
        registration = self._registrations.get(provider_type)
        if registration is None:
            available_providers = ", ".join(self.get_registered_providers())
            raise UnsupportedProviderError(
                f"Provider type '{provider_type}' is not registered. "
                f"Available providers: {available_providers}"
            )

        kind_registry = registration.registry_factory(config)
        self._logger.info(
            "Provider bound",
            provider_type=provider_type,
            kinds=sorted(kind.value for kind in kind_registry.supported_kinds),
        )
        return kind_registry


def _create_gcp_registry(config: "AppConfig") -> "ResourceKindRegistry":
    from cloudtag.providers.gcp.registration import create_gcp_registry

    return create_gcp_registry(config)


def _create_aws_registry(config: "AppConfig") -> "ResourceKindRegistry":
    from cloudtag.providers.aws.registration import create_aws_registry

    return create_aws_registry(config)


def _create_mock_registry(config: "AppConfig") -> "ResourceKindRegistry":
    from cloudtag.providers.mock.registration import create_mock_registry

    return create_mock_registry(config)


def register_builtin_providers(registry: ProviderRegistry) -> None:
    """Register the gcp, aws and mock providers."""
    registry.register_provider("gcp", _create_gcp_registry)
    registry.register_provider("aws", _create_aws_registry)
    registry.register_provider("mock", _create_mock_registry)


def get_provider_registry() -> ProviderRegistry:
    """Get the global provider registry."""
    return ProviderRegistry.get_instance()
