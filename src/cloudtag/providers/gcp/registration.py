"""GCP provider registration."""

from typing import TYPE_CHECKING, Optional

from cloudtag.application.tag.registry import ResourceKindRegistry
from cloudtag.infrastructure.exceptions import ConfigurationError
from cloudtag.providers.gcp.accessors import GCPClusterAccessor, GCPDiskAccessor, GCPInstanceAccessor
from cloudtag.providers.gcp.gcp_client import GCPClient

if TYPE_CHECKING:
    from cloudtag.config.schemas import AppConfig


def create_gcp_registry(
    config: "AppConfig", gcp_client: Optional[GCPClient] = None
) -> ResourceKindRegistry:
    """Bind VM, DISK and CLUSTER to Compute Engine and GKE."""
    if gcp_client is None:
        if config.provider.gcp is None:
            raise ConfigurationError("provider.gcp must be configured for the gcp provider")
        gcp_client = GCPClient(config.provider.gcp)
    return ResourceKindRegistry(
        [
            GCPInstanceAccessor(gcp_client),
            GCPDiskAccessor(gcp_client),
            GCPClusterAccessor(gcp_client),
        ]
    )
