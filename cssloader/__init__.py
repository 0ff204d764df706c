"""Audience-aware CSS discovery and HTML injection."""

__version__ = "2.0.1"
