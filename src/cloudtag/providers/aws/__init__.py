"""AWS provider - EC2, EBS and EKS tags."""

from .accessors import EBSVolumeAccessor, EC2InstanceAccessor, EKSClusterAccessor
from .aws_client import AWSClient
from .registration import create_aws_registry

__all__ = [
    "AWSClient",
    "EC2InstanceAccessor",
    "EBSVolumeAccessor",
    "EKSClusterAccessor",
    "create_aws_registry",
]
