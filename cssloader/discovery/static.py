"""Discovery returning a preset classification."""

from __future__ import annotations

from typing import Iterable, Mapping

from ..models import AudienceClassification, CssFile
from .base import CssDiscovery


class StaticCssDiscovery(CssDiscovery):
    """Serves a fixed classification, for tests and hosts without a CSS directory."""

    def __init__(self, files: Mapping[str, Iterable[CssFile]] | None = None) -> None:
        self._files = {audience: list(items) for audience, items in (files or {}).items()}

    def discover(self) -> AudienceClassification:
        return {audience: list(items) for audience, items in self._files.items()}
