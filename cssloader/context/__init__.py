"""Audience detectors."""

from .base import ContextDetector
from .fixed import FixedContextDetector
from .runtime import CLIENT_FLAG, STAFF_FLAG, RuntimeContextDetector

__all__ = [
    "CLIENT_FLAG",
    "ContextDetector",
    "FixedContextDetector",
    "RuntimeContextDetector",
    "STAFF_FLAG",
]
