"""Filesystem-backed stylesheet discovery."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Mapping, Optional, Pattern, Tuple

from ..logging import get_logger
from ..models import AudienceClassification, CssFile
from .base import CssDiscovery

# Alphanumeric start, alphanumeric/hyphen/underscore body, lowercase .css suffix.
_FILENAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*\.css$")

_DEFAULT_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("staff", "staff"),
    ("client", "client"),
)


class FilesystemCssDiscovery(CssDiscovery):
    """Scans one directory for ``*.css`` files and classifies them by filename.

    Each candidate is resolved to its canonical path and must stay inside the
    canonical base directory, so symlinks cannot pull in files from elsewhere.
    Filenames must also pass a strict allowlist before they are classified.
    Classification is first-match-wins over the configured audience patterns;
    files matching no pattern are ignored.
    """

    def __init__(
        self,
        base_directory: str | Path,
        patterns: Mapping[str, str | Pattern[str]] | None = None,
    ) -> None:
        self._base_directory = Path(base_directory)
        source = patterns.items() if patterns is not None else _DEFAULT_PATTERNS
        self._patterns: List[Tuple[str, Pattern[str]]] = [
            (audience, _compile(pattern)) for audience, pattern in source
        ]
        self._canonical_base: Optional[Path] = None
        self.logger = get_logger("discovery")

    @property
    def base_directory(self) -> Path:
        return self._base_directory

    @property
    def audiences(self) -> List[str]:
        return [audience for audience, _ in self._patterns]

    def discover(self) -> AudienceClassification:
        result: AudienceClassification = {audience: [] for audience in self.audiences}

        if not self._base_directory.is_dir():
            return result

        canonical_base = self._resolve_base()
        if canonical_base is None:
            return result

        try:
            candidates = sorted(self._base_directory.glob("*.css"))
        except OSError as exc:
            self.logger.warning("Unable to list %s: %s", self._base_directory, exc)
            return result

        for candidate in candidates:
            css_file = self._inspect(candidate, canonical_base)
            if css_file is None:
                continue
            for audience, pattern in self._patterns:
                if pattern.search(css_file.filename):
                    result[audience].append(css_file)
                    break

        return result

    def is_valid_filename(self, filename: str) -> bool:
        return _FILENAME_PATTERN.fullmatch(filename) is not None

    def _resolve_base(self) -> Optional[Path]:
        if self._canonical_base is None:
            try:
                self._canonical_base = self._base_directory.resolve(strict=True)
            except (OSError, RuntimeError):
                return None
        return self._canonical_base

    def _inspect(self, candidate: Path, canonical_base: Path) -> Optional[CssFile]:
        try:
            real_path = candidate.resolve(strict=True)
        except (OSError, RuntimeError):
            # Broken symlink or file removed mid-scan.
            return None

        if canonical_base not in real_path.parents:
            self.logger.warning("Security: path traversal attempt blocked: %s", candidate)
            return None

        filename = real_path.name
        if not self.is_valid_filename(filename):
            self.logger.warning("Security: invalid filename blocked: %s", filename)
            return None

        try:
            return CssFile.from_path(real_path)
        except FileNotFoundError:
            return None


def _compile(pattern: str | Pattern[str]) -> Pattern[str]:
    if isinstance(pattern, str):
        return re.compile(pattern, re.IGNORECASE)
    return pattern

