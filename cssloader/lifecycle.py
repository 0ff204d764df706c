"""Install and upgrade steps run before the request pipeline."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List, Optional, Sequence

from packaging.version import InvalidVersion, Version

from . import __version__
from .config import ConfigError, LoaderConfig, save_installed_version
from .logging import get_logger

DEMO_DIR = Path(__file__).parent / "assets" / "demo"
DEMO_FILES: Sequence[str] = ("custom-staff.css", "custom-client.css")

logger = get_logger("lifecycle")


def ensure_css_directory(path: Path) -> bool:
    """Create the stylesheet directory when it is missing."""
    if path.is_dir():
        return True
    try:
        path.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Failed to create directory %s: %s", path, exc)
        return False
    logger.info("Created CSS directory %s", path)
    return True


def copy_demo_files_if_empty(path: Path, demo_dir: Optional[Path] = None) -> List[str]:
    """Seed the bundled demo stylesheets into an empty directory."""
    if not path.is_dir() or any(path.glob("*.css")):
        return []

    source_dir = demo_dir or DEMO_DIR
    copied: List[str] = []
    for name in DEMO_FILES:
        source = source_dir / name
        target = path / name
        if not source.is_file() or target.exists():
            continue
        try:
            shutil.copyfile(source, target)
        except OSError as exc:
            logger.warning("Failed to copy demo file %s: %s", name, exc)
            continue
        logger.info("Copied demo file %s", name)
        copied.append(name)
    return copied


def needs_update(installed: Optional[str], current: str) -> bool:
    """Return True when ``installed`` is missing or older than ``current``."""
    if not installed:
        return True
    try:
        return Version(installed) < Version(current)
    except InvalidVersion:
        logger.warning("Unrecognised installed version %r; treating as outdated", installed)
        return True


def perform_update(
    config: LoaderConfig,
    from_version: Optional[str],
    to_version: str,
    *,
    config_path: Optional[Path] = None,
) -> None:
    logger.info("Updating CSS loader from %s to %s", from_version or "(none)", to_version)
    ensure_css_directory(config.css_directory)
    _record_version(config, to_version, config_path)


def check_version(
    config: LoaderConfig,
    current_version: str = __version__,
    *,
    config_path: Optional[Path] = None,
) -> bool:
    """Run upgrade steps once per version bump. Returns True if an update ran."""
    installed = config.installed_version
    if not needs_update(installed, current_version):
        return False
    perform_update(config, installed, current_version, config_path=config_path)
    return True


def enable(
    config: LoaderConfig,
    *,
    config_path: Optional[Path] = None,
    current_version: str = __version__,
) -> List[str]:
    """Prepare the stylesheet directory and record the installed version."""
    copied: List[str] = []
    if ensure_css_directory(config.css_directory):
        copied = copy_demo_files_if_empty(config.css_directory)
    _record_version(config, current_version, config_path)
    return copied


def _record_version(config: LoaderConfig, version: str, config_path: Optional[Path]) -> None:
    config.installed_version = version
    try:
        save_installed_version(config_path or config.root, version)
    except (OSError, ConfigError) as exc:
        logger.error("Failed to save installed version %s: %s", version, exc)


__all__ = [
    "DEMO_FILES",
    "check_version",
    "copy_demo_files_if_empty",
    "enable",
    "ensure_css_directory",
    "needs_update",
    "perform_update",
]
