"""Base class for audience detection."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import AUDIENCE_CLIENT, AUDIENCE_STAFF


class ContextDetector(ABC):
    """Contract for deciding which audience is viewing the current request."""

    STAFF = AUDIENCE_STAFF
    CLIENT = AUDIENCE_CLIENT

    @abstractmethod
    def detect(self) -> Optional[str]:
        """Return the audience key, or None when there is no page context."""

    def is_staff(self) -> bool:
        return self.detect() == self.STAFF

    def is_client(self) -> bool:
        return self.detect() == self.CLIENT
