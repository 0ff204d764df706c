"""Configuration loading for the CSS loader (.cssloader.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Sequence, Tuple

import yaml

CONFIG_FILENAME = ".cssloader.yml"
DEFAULT_CSS_DIR = "assets/custom/css"
DEFAULT_BASE_URL = "/assets/custom/css"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


def _default_patterns() -> Dict[str, str]:
    return {"staff": "staff", "client": "client"}


@dataclass
class DetectionConfig:
    """Request-path hints used when the host has not flagged the audience."""

    staff_path_segment: str = "/scp/"
    api_path_segment: str = "/api/"
    dynamic_suffixes: Tuple[str, ...] = (".php", ".html", ".htm")


@dataclass
class LoaderConfig:
    """Represents the settings defined in .cssloader.yml."""

    root: Path
    enabled: bool = True
    base_directory: Optional[Path] = None
    base_url: str = DEFAULT_BASE_URL
    audience_patterns: Dict[str, str] = field(default_factory=_default_patterns)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    installed_version: Optional[str] = None

    def __post_init__(self) -> None:
        if self.base_directory is None:
            self.base_directory = self.root / DEFAULT_CSS_DIR

    @property
    def css_directory(self) -> Path:
        assert self.base_directory is not None
        return self.base_directory

    def compiled_patterns(self) -> List[Tuple[str, Pattern[str]]]:
        """Return (audience, regex) rules in configured order, case-insensitive."""
        return [
            (audience, re.compile(pattern, re.IGNORECASE))
            for audience, pattern in self.audience_patterns.items()
        ]


def load_config(config_path: Path) -> LoaderConfig:
    """Load configuration from disk."""
    config_file = resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return LoaderConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    enabled = _as_bool(data.get("enabled"))

    css_data = _as_dict(data.get("css"))
    directory = _as_str(css_data.get("directory")) if css_data else None
    base_url = _as_str(css_data.get("base_url")) if css_data else None
    base_directory = None
    if directory:
        candidate = Path(directory).expanduser()
        base_directory = candidate if candidate.is_absolute() else root / candidate

    patterns = _default_patterns()
    if "audiences" in data:
        raw_patterns = data.get("audiences")
        if not isinstance(raw_patterns, dict) or not raw_patterns:
            raise ConfigError("'audiences' must be a non-empty mapping of name to pattern")
        patterns = {}
        for audience, pattern in raw_patterns.items():
            pattern_str = _as_str(pattern)
            if not pattern_str:
                raise ConfigError(f"Audience '{audience}' has an empty pattern")
            try:
                re.compile(pattern_str)
            except re.error as exc:
                raise ConfigError(f"Invalid pattern for audience '{audience}': {exc}") from exc
            patterns[str(audience)] = pattern_str

    detection = DetectionConfig()
    detection_data = _as_dict(data.get("detection"))
    if detection_data:
        staff_segment = _as_str(detection_data.get("staff_path_segment"))
        api_segment = _as_str(detection_data.get("api_path_segment"))
        suffixes = _as_str_list(detection_data.get("dynamic_suffixes"))
        if staff_segment:
            detection.staff_path_segment = staff_segment
        if api_segment:
            detection.api_path_segment = api_segment
        if suffixes:
            detection.dynamic_suffixes = tuple(suffix.lower() for suffix in suffixes)

    return LoaderConfig(
        root=root,
        enabled=True if enabled is None else enabled,
        base_directory=base_directory,
        base_url=base_url or DEFAULT_BASE_URL,
        audience_patterns=patterns,
        detection=detection,
        installed_version=_as_str(data.get("installed_version")),
    )


def save_installed_version(config_path: Path, version: str) -> Path:
    """Persist the installed version, keeping the remaining settings intact."""
    config_file = resolve_config_path(config_path)
    data: Dict[str, Any] = {}
    if config_file.exists():
        loaded = _read_config(config_file)
        if not isinstance(loaded, dict):
            raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
        data = loaded
    data["installed_version"] = version
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(
        yaml.safe_dump(data, sort_keys=False, default_flow_style=False),
        encoding="utf-8",
    )
    return config_file


def resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME and config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1", "on"}:
            return True
        if lowered in {"false", "no", "0", "off"}:
            return False
    if isinstance(value, int):
        return bool(value)
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DetectionConfig",
    "LoaderConfig",
    "load_config",
    "resolve_config_path",
    "save_installed_version",
]
