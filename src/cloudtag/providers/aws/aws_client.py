"""AWS client management."""

from typing import Any, Dict, Optional

import boto3
from botocore.config import Config

from cloudtag.config.schemas.provider_schema import AWSProviderConfig
from cloudtag.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


class AWSClient:
    """
    Centralized AWS client management.
    Handles session and client creation for the tagging accessors.
    """

    def __init__(self, config: AWSProviderConfig, session: Optional[boto3.Session] = None):
        """
        Initialize AWS client with configuration.

        Args:
            config: AWS provider configuration
            session: Pre-built boto3 session
        """
        self.config = config
        self.session = session or boto3.Session(
            profile_name=config.profile, region_name=config.region
        )
        self.boto_config = Config(
            region_name=config.region,
            retries={
                "max_attempts": config.max_retry_attempts,
                "mode": "standard",
            },
            connect_timeout=config.connect_timeout,
        )
        self._clients: Dict[str, Any] = {}

    def get_client(self, service_name: str) -> Any:
        """Get or create a client for ``service_name``."""
        if service_name not in self._clients:
            kwargs = {"config": self.boto_config}
            if self.config.endpoint_url:
                kwargs["endpoint_url"] = self.config.endpoint_url
            logger.debug(
                "Creating AWS client",
                service=service_name,
                region=self.config.region,
                endpoint_url=self.config.endpoint_url,
            )
            self._clients[service_name] = self.session.client(service_name, **kwargs)
        return self._clients[service_name]

    @property
    def ec2_client(self) -> Any:
        return self.get_client("ec2")

    @property
    def eks_client(self) -> Any:
        return self.get_client("eks")

