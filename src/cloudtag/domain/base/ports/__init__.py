"""Domain ports for provider concerns."""

from .resource_accessor_port import ResourceAccessorPort

__all__ = ["ResourceAccessorPort"]
