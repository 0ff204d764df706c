"""Stylesheet discovery services."""

from .base import CssDiscovery
from .filesystem import FilesystemCssDiscovery
from .static import StaticCssDiscovery

__all__ = ["CssDiscovery", "FilesystemCssDiscovery", "StaticCssDiscovery"]
