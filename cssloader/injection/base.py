"""Base class for tag injection strategies."""

from abc import ABC, abstractmethod
from typing import Sequence


class InjectionStrategy(ABC):
    """Contract for placing rendered tags into the host's output."""

    @abstractmethod
    def inject(self, buffer: str, tags: Sequence[str]) -> str:
        """Return ``buffer`` with ``tags`` applied; never raises."""


class NullInjectionStrategy(InjectionStrategy):
    """Leaves the buffer untouched."""

    def inject(self, buffer: str, tags: Sequence[str]) -> str:
        return buffer
