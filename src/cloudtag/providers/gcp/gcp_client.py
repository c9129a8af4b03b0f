"""GCP client management."""

from typing import Any, Optional

import google.auth
from google.auth.exceptions import DefaultCredentialsError
from google.oauth2 import service_account
from googleapiclient import discovery

from cloudtag.config.schemas.provider_schema import GCPProviderConfig
from cloudtag.infrastructure.exceptions import ConfigurationError
from cloudtag.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"


class GCPClient:
    """
    Centralized GCP service management.

    Holds the project/region/zone scope and lazily builds the Compute Engine
    and GKE discovery services. Services can be injected, which tests use.
    """

    def __init__(
        self,
        config: GCPProviderConfig,
        credentials: Optional[Any] = None,
        compute: Optional[Any] = None,
        container: Optional[Any] = None,
    ):
        """
        Initialize GCP client.

        Args:
            config: GCP scope and credentials settings
            credentials: Pre-built google-auth credentials
            compute: Pre-built compute v1 service
            container: Pre-built container v1 service
        """
        self.config = config
        self._credentials = credentials
        self._compute = compute
        self._container = container

    @property
    def project_id(self) -> str:
        return self.config.project_id

    @property
    def region(self) -> str:
        return self.config.region

    @property
    def zone(self) -> str:
        return self.config.zone

    @property
    def credentials(self) -> Any:
        if self._credentials is None:
            self._credentials = self._load_credentials()
        return self._credentials

    @property
    def compute(self) -> Any:
        if self._compute is None:
            self._compute = self._build("compute", "v1")
        return self._compute

    @property
    def container(self) -> Any:
        if self._container is None:
            self._container = self._build("container", "v1")
        return self._container

    def _load_credentials(self) -> Any:
        try:
            if self.config.credentials_file:
                logger.debug("Loading service account credentials", path=self.config.credentials_file)
                return service_account.Credentials.from_service_account_file(
                    self.config.credentials_file, scopes=[CLOUD_PLATFORM_SCOPE]
                )
            credentials, _ = google.auth.default(scopes=[CLOUD_PLATFORM_SCOPE])
            return credentials
        except (DefaultCredentialsError, OSError, ValueError) as e:
            logger.error("Failed to load GCP credentials", error=str(e))
            raise ConfigurationError(f"Failed to load GCP credentials: {e}") from e

    def _build(self, service_name: str, version: str) -> Any:
        logger.debug("Building GCP service", service=service_name, version=version)
        return discovery.build(
            service_name, version, credentials=self.credentials, cache_discovery=False
        )

    def location_path(self) -> str:
        """GKE parent path for the configured zone."""
        return f"projects/{self.project_id}/locations/{self.zone}"

    def cluster_path(self, cluster_id: str) -> str:
        return f"{self.location_path()}/clusters/{cluster_id}"

    def container_operation_path(self, operation_name: str) -> str:
        return f"{self.location_path()}/operations/{operation_name}"
