"""Tests for filesystem stylesheet discovery."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from cssloader.discovery import FilesystemCssDiscovery, StaticCssDiscovery
from cssloader.models import CssFile
from tests._fixtures.css_builder import CssDirBuilder


def _names(files: list[CssFile]) -> list[str]:
    return [css_file.filename for css_file in files]


def test_missing_directory_returns_empty_lists(tmp_path: Path) -> None:
    discovery = FilesystemCssDiscovery(tmp_path / "missing")
    assert discovery.discover() == {"staff": [], "client": []}


def test_classifies_by_audience_pattern(css_dir: CssDirBuilder) -> None:
    css_dir.touch("admin-staff-theme.css", 1700000000)
    css_dir.touch("portal-client.css", 1700000100)
    css_dir.touch("theme.css", 1700000200)

    result = css_dir.discover()

    assert _names(result["staff"]) == ["admin-staff-theme.css"]
    assert _names(result["client"]) == ["portal-client.css"]
    staff_file = result["staff"][0]
    assert staff_file.mtime == 1700000000
    assert Path(staff_file.path) == (css_dir.path() / "admin-staff-theme.css").resolve()


def test_unmatched_files_are_dropped(css_dir: CssDirBuilder) -> None:
    css_dir.touch("theme.css", 1700000000)
    assert css_dir.discover() == {"staff": [], "client": []}


def test_pattern_matching_is_case_insensitive(css_dir: CssDirBuilder) -> None:
    css_dir.touch("STAFF-dark.css", 1700000000)
    css_dir.touch("My-Client.css", 1700000000)

    result = css_dir.discover()

    assert _names(result["staff"]) == ["STAFF-dark.css"]
    assert _names(result["client"]) == ["My-Client.css"]


def test_first_matching_pattern_wins(css_dir: CssDirBuilder) -> None:
    css_dir.touch("staff-client-shared.css", 1700000000)

    result = css_dir.discover()

    assert _names(result["staff"]) == ["staff-client-shared.css"]
    assert result["client"] == []


def test_custom_patterns_keep_configured_order(css_dir: CssDirBuilder) -> None:
    css_dir.touch("print-agent.css", 1700000000)
    css_dir.touch("agent-only.css", 1700000000)

    discovery = FilesystemCssDiscovery(
        css_dir.path(), {"print": r"^print-", "agent": "agent"}
    )
    result = discovery.discover()

    assert list(result) == ["print", "agent"]
    assert _names(result["print"]) == ["print-agent.css"]
    assert _names(result["agent"]) == ["agent-only.css"]


def test_scan_is_not_recursive(css_dir: CssDirBuilder) -> None:
    nested = css_dir.path() / "nested"
    nested.mkdir()
    (nested / "nested-staff.css").write_text("body {}", encoding="utf-8")

    assert css_dir.discover()["staff"] == []


def test_non_css_files_are_ignored(css_dir: CssDirBuilder) -> None:
    css_dir.write({"staff-notes.txt": "x", "staff.css.bak": "x"})
    assert css_dir.discover()["staff"] == []


def test_invalid_filenames_are_blocked_and_logged(
    css_dir: CssDirBuilder, caplog: pytest.LogCaptureFixture
) -> None:
    css_dir.touch("-staff.css", 1700000000)
    css_dir.touch("staff theme.css", 1700000000)
    css_dir.touch("staff.min.css", 1700000000)
    css_dir.touch("good-staff.css", 1700000000)

    with caplog.at_level(logging.WARNING, logger="cssloader"):
        result = css_dir.discover()

    assert _names(result["staff"]) == ["good-staff.css"]
    messages = [record.getMessage() for record in caplog.records]
    assert any("invalid filename blocked: -staff.css" in message for message in messages)
    assert any("staff.min.css" in message for message in messages)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlink_escape_is_blocked(
    tmp_path: Path, css_dir: CssDirBuilder, caplog: pytest.LogCaptureFixture
) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    secret = outside / "secret-staff.css"
    secret.write_text("body {}", encoding="utf-8")
    (css_dir.path() / "evil-staff.css").symlink_to(secret)
    css_dir.touch("real-staff.css", 1700000000)

    with caplog.at_level(logging.WARNING, logger="cssloader"):
        result = css_dir.discover()

    assert _names(result["staff"]) == ["real-staff.css"]
    for css_file in result["staff"]:
        assert css_dir.path().resolve() in Path(css_file.path).parents
    assert any("path traversal attempt blocked" in r.getMessage() for r in caplog.records)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_broken_symlink_is_skipped_silently(
    css_dir: CssDirBuilder, caplog: pytest.LogCaptureFixture
) -> None:
    (css_dir.path() / "dangling-staff.css").symlink_to(css_dir.path() / "gone.css")

    with caplog.at_level(logging.WARNING, logger="cssloader"):
        result = css_dir.discover()

    assert result["staff"] == []
    assert caplog.records == []


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlink_within_directory_is_allowed(css_dir: CssDirBuilder) -> None:
    target = css_dir.touch("base-staff.css", 1700000000)
    (css_dir.path() / "alias.css").symlink_to(target)

    result = css_dir.discover()

    # Both entries resolve to the same in-directory file.
    assert _names(result["staff"]) == ["base-staff.css", "base-staff.css"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlinked_base_directory_is_canonicalised(tmp_path: Path, css_dir: CssDirBuilder) -> None:
    css_dir.touch("linked-client.css", 1700000000)
    link = tmp_path / "link"
    link.symlink_to(css_dir.path(), target_is_directory=True)

    result = FilesystemCssDiscovery(link).discover()

    assert _names(result["client"]) == ["linked-client.css"]


@pytest.mark.parametrize(
    "filename",
    ["staff.css", "a.css", "Admin_Staff-2.css", "0client.css"],
)
def test_is_valid_filename_accepts_allowlisted_names(filename: str) -> None:
    assert FilesystemCssDiscovery("/nonexistent").is_valid_filename(filename) is True


@pytest.mark.parametrize(
    "filename",
    [
        "../../etc/passwd.css",
        "..staff.css",
        "staff\x00.css",
        "<script>.css",
        "staff\".css",
        "staff'.css",
        "staff theme.css",
        "-staff.css",
        "_staff.css",
        ".staff.css",
        "staff.CSS",
        "staff.css.php",
        "staff.min.css",
        "staff.js",
        "stäff.css",
        "sub/staff.css",
        ".css",
        "",
    ],
)
def test_is_valid_filename_rejects_unsafe_names(filename: str) -> None:
    assert FilesystemCssDiscovery("/nonexistent").is_valid_filename(filename) is False


def test_static_discovery_returns_copies() -> None:
    css_file = CssFile(path="/tmp/a-staff.css", filename="a-staff.css", mtime=1)
    discovery = StaticCssDiscovery({"staff": [css_file]})

    first = discovery.discover()
    first["staff"].clear()

    assert discovery.discover() == {"staff": [css_file]}


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_canonical_base_is_cached_per_instance(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "one-staff.css").write_text("body {}", encoding="utf-8")
    (second / "two-staff.css").write_text("body {}", encoding="utf-8")
    link = tmp_path / "current"
    link.symlink_to(first, target_is_directory=True)
    discovery = FilesystemCssDiscovery(link)

    assert _names(discovery.discover()["staff"]) == ["one-staff.css"]

    link.unlink()
    link.symlink_to(second, target_is_directory=True)

    # Entries now resolve into "second", outside the cached canonical base.
    assert discovery.discover()["staff"] == []
    assert _names(FilesystemCssDiscovery(link).discover()["staff"]) == ["two-staff.css"]


def test_canonicalisation_failure_returns_empty_result(
    css_dir: CssDirBuilder, monkeypatch: pytest.MonkeyPatch
) -> None:
    css_dir.touch("a-staff.css", 1700000000)
    css_dir.touch("b-client.css", 1700000000)

    def failing_resolve(self: Path, strict: bool = False) -> Path:
        raise OSError("resolution failed")

    monkeypatch.setattr(Path, "resolve", failing_resolve)

    discovery = FilesystemCssDiscovery(css_dir.path(), {"staff": "staff", "client": "client", "print": "print"})
    assert discovery.discover() == {"staff": [], "client": [], "print": []}
