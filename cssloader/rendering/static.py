"""Renderer returning preset tags."""

from __future__ import annotations

from typing import Mapping

from ..models import CssFile
from .base import CssRenderer


class StaticCssRenderer(CssRenderer):
    """Maps filenames to preset tags; unknown files render as empty strings."""

    def __init__(self, tags: Mapping[str, str] | None = None) -> None:
        self._tags = dict(tags or {})

    def render(self, css_file: CssFile) -> str:
        return self._tags.get(css_file.filename, "")
