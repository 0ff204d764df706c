"""Strategies for placing rendered tags into host output."""

from .base import InjectionStrategy, NullInjectionStrategy
from .buffer import BufferInjectionStrategy
from .header import HeaderInjectionStrategy, select_injection_strategy, supports_extra_headers

__all__ = [
    "BufferInjectionStrategy",
    "HeaderInjectionStrategy",
    "InjectionStrategy",
    "NullInjectionStrategy",
    "select_injection_strategy",
    "supports_extra_headers",
]
