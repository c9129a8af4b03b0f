"""AWS provider registration."""

from typing import TYPE_CHECKING, Optional

from cloudtag.application.tag.registry import ResourceKindRegistry
from cloudtag.providers.aws.accessors import EBSVolumeAccessor, EC2InstanceAccessor, EKSClusterAccessor
from cloudtag.providers.aws.aws_client import AWSClient

if TYPE_CHECKING:
    from cloudtag.config.schemas import AppConfig


def create_aws_registry(
    config: "AppConfig", aws_client: Optional[AWSClient] = None
) -> ResourceKindRegistry:
    """Bind VM, DISK and CLUSTER to EC2, EBS and EKS."""
    if aws_client is None:
        aws_client = AWSClient(config.provider.aws)
    return ResourceKindRegistry(
        [
            EC2InstanceAccessor(aws_client),
            EBSVolumeAccessor(aws_client),
            EKSClusterAccessor(aws_client),
        ]
    )
