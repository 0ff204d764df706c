"""Stylesheet tag renderers."""

from .base import CssRenderer
from .links import HtmlCssRenderer
from .static import StaticCssRenderer

__all__ = ["CssRenderer", "HtmlCssRenderer", "StaticCssRenderer"]
