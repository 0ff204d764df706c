"""Base class for stylesheet discovery."""

from abc import ABC, abstractmethod

from ..models import AudienceClassification


class CssDiscovery(ABC):
    """Contract for services that classify stylesheets by audience."""

    @abstractmethod
    def discover(self) -> AudienceClassification:
        """Return stylesheets keyed by audience; never raises."""
