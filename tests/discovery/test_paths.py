"""Tests for path template expansion and the app data directory."""

from __future__ import annotations

from pathlib import Path

import pytest

from skillmirror.discovery.paths import PathResolver, app_data_dir, current_platform


# ---------------------------------------------------------------------------
# app_data_dir()
# ---------------------------------------------------------------------------


class TestAppDataDir:
    """Per-platform configuration directory."""

    def test_linux_default(self, tmp_path: Path) -> None:
        assert app_data_dir(home=tmp_path, plat="linux") == tmp_path / ".config"

    def test_linux_honours_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        assert app_data_dir(home=tmp_path, plat="linux") == tmp_path / "xdg"

    def test_macos(self, tmp_path: Path) -> None:
        expected = tmp_path / "Library" / "Application Support"
        assert app_data_dir(home=tmp_path, plat="macos") == expected

    def test_windows_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APPDATA", str(tmp_path / "Roaming"))
        assert app_data_dir(home=tmp_path, plat="windows") == tmp_path / "Roaming"

    def test_windows_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("APPDATA", raising=False)
        expected = tmp_path / "AppData" / "Roaming"
        assert app_data_dir(home=tmp_path, plat="windows") == expected

    def test_current_platform_known(self) -> None:
        assert current_platform() in {"macos", "windows", "linux"}


# ---------------------------------------------------------------------------
# PathResolver.resolve()
# ---------------------------------------------------------------------------


class TestResolve:
    """Template expansion rules."""

    def test_empty_template(self, tmp_path: Path) -> None:
        assert PathResolver(home=tmp_path).resolve("") is None

    def test_tilde_alone(self, tmp_path: Path) -> None:
        assert PathResolver(home=tmp_path).resolve("~") == tmp_path

    def test_tilde_prefix(self, tmp_path: Path) -> None:
        resolved = PathResolver(home=tmp_path).resolve("~/.cc-switch/skills")
        assert resolved == tmp_path / ".cc-switch" / "skills"

    def test_bare_relative_is_home_relative(self, tmp_path: Path) -> None:
        resolved = PathResolver(home=tmp_path).resolve(".claude/skills")
        assert resolved == tmp_path / ".claude" / "skills"

    def test_appdata_prefix(self, tmp_path: Path) -> None:
        resolver = PathResolver(home=tmp_path, app_data=tmp_path / "appdata")
        assert resolver.resolve("%APPDATA%/Code") == tmp_path / "appdata" / "Code"

    def test_appdata_prefix_case_insensitive(self, tmp_path: Path) -> None:
        resolver = PathResolver(home=tmp_path, app_data=tmp_path / "appdata")
        assert resolver.resolve("%appdata%/Code") == tmp_path / "appdata" / "Code"

    def test_absolute_unchanged(self, tmp_path: Path) -> None:
        absolute = tmp_path / "elsewhere" / "skills"
        assert PathResolver(home=tmp_path).resolve(str(absolute)) == absolute

    def test_app_data_follows_home_override(self, tmp_path: Path) -> None:
        resolver = PathResolver(home=tmp_path)
        assert resolver.app_data == app_data_dir(tmp_path)
