"""HTML ``<link>`` renderer with cache busting."""

from __future__ import annotations

import html
import re

from ..logging import get_logger
from ..models import CssFile
from .base import CssRenderer

# Checked again here even though discovery filters the same way: descriptors
# may reach the renderer from other sources.
_FILENAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*\.css$")


class HtmlCssRenderer(CssRenderer):
    """Renders ``<link rel="stylesheet">`` tags below a public URL prefix."""

    def __init__(self, base_url: str) -> None:
        self._base_url = base_url
        self.logger = get_logger("rendering")

    @property
    def base_url(self) -> str:
        return self._base_url

    def render(self, css_file: CssFile) -> str:
        if not self.is_valid_filename(css_file.filename):
            self.logger.warning(
                "Security: invalid filename blocked in renderer: %r", css_file.filename
            )
            return ""
        href = html.escape(self.build_url(css_file), quote=True)
        return f'<link rel="stylesheet" href="{href}">'

    def build_url(self, css_file: CssFile) -> str:
        url = f"{self._base_url.rstrip('/')}/{css_file.filename}"
        if css_file.mtime > 0:
            url += f"?v={css_file.mtime}"
        return url

    def is_valid_filename(self, filename: str) -> bool:
        return _FILENAME_PATTERN.fullmatch(filename) is not None
