"""Detector returning a pre-configured audience."""

from __future__ import annotations

from typing import Optional

from .base import ContextDetector


class FixedContextDetector(ContextDetector):
    """Returns a constant audience, for tests and non-HTTP invocations."""

    def __init__(self, context: Optional[str] = None) -> None:
        self._context = context

    def detect(self) -> Optional[str]:
        return self._context

    def set_context(self, context: Optional[str]) -> None:
        self._context = context
