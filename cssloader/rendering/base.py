"""Base class for stylesheet tag rendering."""

from abc import ABC, abstractmethod
from typing import Iterable, List

from ..models import CssFile


class CssRenderer(ABC):
    """Contract for turning stylesheet descriptors into HTML tags."""

    @abstractmethod
    def render(self, css_file: CssFile) -> str:
        """Return the HTML tag for ``css_file`` or an empty string when rejected."""

    def render_all(self, files: Iterable[CssFile]) -> List[str]:
        """Render every file, dropping rejected entries and keeping order."""
        return [tag for tag in (self.render(css_file) for css_file in files) if tag]
