"""Core data models shared across cssloader components."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

AUDIENCE_STAFF = "staff"
AUDIENCE_CLIENT = "client"

DEFAULT_AUDIENCES = (AUDIENCE_STAFF, AUDIENCE_CLIENT)


@dataclass(frozen=True)
class CssFile:
    """Immutable descriptor for a discovered stylesheet."""

    path: str
    filename: str
    mtime: int = 0

    @classmethod
    def from_path(cls, path: str | Path) -> "CssFile":
        """Build a descriptor from an existing file on disk."""
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"CSS file does not exist: {file_path}")
        try:
            mtime = int(file_path.stat().st_mtime)
        except OSError:
            mtime = 0
        return cls(path=str(file_path), filename=file_path.name, mtime=mtime)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CssFile":
        return cls(
            path=str(data["path"]),
            filename=str(data["filename"]),
            mtime=int(data.get("mtime") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "filename": self.filename, "mtime": self.mtime}


AudienceClassification = Dict[str, List[CssFile]]


__all__ = [
    "AUDIENCE_CLIENT",
    "AUDIENCE_STAFF",
    "AudienceClassification",
    "CssFile",
    "DEFAULT_AUDIENCES",
]
