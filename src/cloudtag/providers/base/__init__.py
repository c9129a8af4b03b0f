"""Shared provider adapter base classes."""

from .accessor import BaseResourceAccessor

__all__ = ["BaseResourceAccessor"]
