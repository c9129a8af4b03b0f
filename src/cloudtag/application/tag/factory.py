"""Tag manager construction from application configuration."""

from typing import Optional

from cloudtag.application.tag.registry import ResourceKindRegistry
from cloudtag.application.tag.service import TagManager
from cloudtag.application.tag.waiter import OperationWaiter
from cloudtag.config.manager import ConfigurationManager
from cloudtag.config.schemas import AppConfig
from cloudtag.infrastructure.logging.logger import setup_logging
from cloudtag.infrastructure.registry.provider_registry import ProviderRegistry, get_provider_registry


def create_tag_manager(
    config: Optional[AppConfig] = None,
    kind_registry: Optional[ResourceKindRegistry] = None,
    provider_registry: Optional[ProviderRegistry] = None,
    waiter: Optional[OperationWaiter] = None,
    configure_logging: bool = True,
) -> TagManager:
    """
    Build a TagManager bound to the configured provider.

    Args:
        config: Application configuration; loaded by ConfigurationManager when None
        kind_registry: Pre-built kind registry, bypassing the provider registry
        provider_registry: Provider registry to resolve ``config.provider.type``
        waiter: Pre-built waiter; built from ``config.waiter`` when None
        configure_logging: Apply ``config.logging`` to the root logger

    Raises:
        ConfigurationError: Configuration is invalid or the provider is unknown
    """
    if config is None:
        config = ConfigurationManager().app_config

    if configure_logging:
        setup_logging(config.logging)

    if kind_registry is None:
        provider_registry = provider_registry or get_provider_registry()
        kind_registry = provider_registry.create_kind_registry(config.provider.type, config)

    return TagManager(
        registry=kind_registry,
        waiter=waiter or OperationWaiter.from_config(config.waiter),
        default_timeout=config.request_timeout,
    )
