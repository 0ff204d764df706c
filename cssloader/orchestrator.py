"""Two-phase coordination of detection, discovery, rendering and injection."""

from __future__ import annotations

from typing import Optional, Tuple

from .config import LoaderConfig
from .context import ContextDetector
from .discovery import CssDiscovery, FilesystemCssDiscovery
from .injection import BufferInjectionStrategy, InjectionStrategy
from .logging import get_logger
from .rendering import CssRenderer, HtmlCssRenderer


class CssLoaderOrchestrator:
    """Coordinates the CSS pipeline for a single request.

    ``prepare`` runs early, before the host produces output, and stores the
    rendered tags for the detected audience. ``inject_into_buffer`` runs once
    the final HTML is available. One instance belongs to one request context;
    reuse across requests requires ``clear`` in between.
    """

    def __init__(
        self,
        context_detector: ContextDetector,
        discovery: CssDiscovery,
        renderer: CssRenderer,
        injection_strategy: InjectionStrategy,
        *,
        enabled: bool = True,
    ) -> None:
        self._context_detector = context_detector
        self._discovery = discovery
        self._renderer = renderer
        self._injection_strategy = injection_strategy
        self._enabled = enabled
        self._pending_links: Tuple[str, ...] = ()
        self._prepared = False
        self.logger = get_logger("orchestrator")

    @classmethod
    def from_config(
        cls,
        config: LoaderConfig,
        context_detector: ContextDetector,
        injection_strategy: Optional[InjectionStrategy] = None,
    ) -> "CssLoaderOrchestrator":
        """Wire the filesystem discovery and HTML renderer from ``config``."""
        return cls(
            context_detector,
            FilesystemCssDiscovery(config.css_directory, dict(config.compiled_patterns())),
            HtmlCssRenderer(config.base_url),
            injection_strategy or BufferInjectionStrategy(),
            enabled=config.enabled,
        )

    def prepare(self) -> None:
        """Discover and render stylesheets for the current audience."""
        self.clear()
        if not self._enabled:
            return

        audience = self._context_detector.detect()
        if audience is None:
            self.logger.debug("No page context detected; nothing to prepare")
            return

        files = self._discovery.discover().get(audience, [])
        self.logger.debug("Found %d stylesheet(s) for %s", len(files), audience)
        if not files:
            return

        self._pending_links = tuple(self._renderer.render_all(files))
        self._prepared = True

    def inject_into_buffer(self, buffer: str) -> str:
        return self._injection_strategy.inject(buffer, self._pending_links)

    def clear(self) -> None:
        self._pending_links = ()
        self._prepared = False

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = bool(enabled)

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def is_prepared(self) -> bool:
        return self._prepared

    @property
    def pending_links(self) -> Tuple[str, ...]:
        return self._pending_links

    @property
    def context_detector(self) -> ContextDetector:
        return self._context_detector

    @property
    def discovery(self) -> CssDiscovery:
        return self._discovery

    @property
    def renderer(self) -> CssRenderer:
        return self._renderer

    @property
    def injection_strategy(self) -> InjectionStrategy:
        return self._injection_strategy


__all__ = ["CssLoaderOrchestrator"]
