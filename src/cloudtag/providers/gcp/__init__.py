"""Google Cloud provider - Compute Engine and GKE labels."""

from .accessors import GCPClusterAccessor, GCPDiskAccessor, GCPInstanceAccessor
from .gcp_client import GCPClient
from .registration import create_gcp_registry

__all__ = [
    "GCPClient",
    "GCPInstanceAccessor",
    "GCPDiskAccessor",
    "GCPClusterAccessor",
    "create_gcp_registry",
]
