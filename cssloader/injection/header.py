"""Injection through a host-provided extra-header API."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..logging import get_logger
from .base import InjectionStrategy
from .buffer import BufferInjectionStrategy


class HeaderInjectionStrategy(InjectionStrategy):
    """Pushes each tag through ``host.add_extra_header`` instead of splicing HTML."""

    def __init__(self, host: Any) -> None:
        if not supports_extra_headers(host):
            raise TypeError("host must provide a callable add_extra_header(tag)")
        self._host = host
        self.logger = get_logger("injection")

    def inject(self, buffer: str, tags: Sequence[str]) -> str:
        for tag in tags:
            self._host.add_extra_header(tag)
            self.logger.debug("Added extra header %s", tag)
        return buffer


def supports_extra_headers(host: Any) -> bool:
    return callable(getattr(host, "add_extra_header", None))


def select_injection_strategy(host: Optional[Any] = None) -> InjectionStrategy:
    """Prefer the host's header API when available, else splice the buffer."""
    if host is not None and supports_extra_headers(host):
        return HeaderInjectionStrategy(host)
    return BufferInjectionStrategy()
