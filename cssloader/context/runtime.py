"""Audience detection from host runtime signals."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..config import DetectionConfig
from .base import ContextDetector

STAFF_FLAG = "staff_panel"
CLIENT_FLAG = "client_portal"


class RuntimeContextDetector(ContextDetector):
    """Detects the audience from host flags, falling back to the request path.

    Host flags are the most reliable signal but may not be set yet while the
    host is still bootstrapping the request. In that case the request path is
    inspected: a staff-panel segment means staff, an API segment means no page
    context, and any other dynamic page means client.
    """

    def __init__(
        self,
        flags: Iterable[str] | None = None,
        request_path: str | None = None,
        *,
        staff_path_segment: str = "/scp/",
        api_path_segment: str = "/api/",
        dynamic_suffixes: Sequence[str] = (".php", ".html", ".htm"),
    ) -> None:
        if isinstance(flags, str):
            flags = (flags,)
        self._flags = frozenset(flags or ())
        self._request_path = request_path if isinstance(request_path, str) else ""
        self._staff_segment = staff_path_segment
        self._api_segment = api_path_segment
        self._dynamic_suffixes = tuple(suffix.lower() for suffix in dynamic_suffixes)

    @classmethod
    def from_config(
        cls,
        detection: DetectionConfig,
        flags: Iterable[str] | None = None,
        request_path: str | None = None,
    ) -> "RuntimeContextDetector":
        return cls(
            flags,
            request_path,
            staff_path_segment=detection.staff_path_segment,
            api_path_segment=detection.api_path_segment,
            dynamic_suffixes=detection.dynamic_suffixes,
        )

    @property
    def request_path(self) -> str:
        return self._request_path

    def detect(self) -> Optional[str]:
        if STAFF_FLAG in self._flags:
            return self.STAFF
        if CLIENT_FLAG in self._flags:
            return self.CLIENT
        return self._detect_from_path(self._request_path)

    def _detect_from_path(self, path: str) -> Optional[str]:
        if not path:
            return None
        if self._staff_segment and self._staff_segment in path:
            return self.STAFF
        if self._api_segment and self._api_segment in path:
            return None
        if self._looks_dynamic(path):
            return self.CLIENT
        return None

    def _looks_dynamic(self, path: str) -> bool:
        last_segment = path.rsplit("/", 1)[-1].lower()
        if "." not in last_segment:
            return True
        return last_segment.endswith(self._dynamic_suffixes)
