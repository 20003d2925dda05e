"""Expansion of tool path templates into absolute filesystem paths.

Tool tables describe their directories as templates so that one table
works on every platform:

- ``~/.cc-switch/skills`` -- relative to the home directory.
- ``%APPDATA%/Code`` -- relative to the platform configuration directory.
- ``.claude/skills`` -- bare relative paths are home-relative.
- Absolute paths are returned unchanged.

Platform Notes:
    Windows maps ``%APPDATA%`` to the ``APPDATA`` environment variable.
    macOS uses ``~/Library/Application Support``. Linux honours
    ``$XDG_CONFIG_HOME`` and falls back to ``~/.config``.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path

# Directory name of this application under the platform app data dir.
APP_DIR_NAME = "com.skillmirror.app"

_HOME_PREFIX = "~"
_APPDATA_PREFIX = "%APPDATA%"


def current_platform() -> str:
    """Return the current platform identifier ("macos", "windows", "linux")."""
    system = platform.system().lower()
    if system == "darwin":
        return "macos"
    return "windows" if system == "windows" else "linux"


def _default_home() -> Path | None:
    try:
        return Path.home()
    except RuntimeError:
        return None


def app_data_dir(home: Path | None = None, plat: str | None = None) -> Path | None:
    """Return the per-user application configuration directory.

    Args:
        home: Override the home directory (for testing).
        plat: Override the platform identifier (for testing).

    Returns:
        The directory, or None if it cannot be determined.
    """
    plat = plat or current_platform()
    home = home if home is not None else _default_home()
    if plat == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata)
        return home / "AppData" / "Roaming" if home is not None else None
    if home is None:
        return None
    if plat == "macos":
        return home / "Library" / "Application Support"
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return home / ".config"


def _strip_separators(rest: str) -> str:
    return rest.lstrip("/\\")


class PathResolver:
    """Expands home- and app-data-relative templates.

    Usage::

        resolver = PathResolver()
        resolver.resolve("~/.claude/skills")
        resolver.resolve("%APPDATA%/Code")

    Args:
        home: Override the home directory (for testing).
        app_data: Override the application data directory (for testing).
    """

    def __init__(self, home: Path | None = None, app_data: Path | None = None) -> None:
        self._home = home
        self._app_data = app_data

    @property
    def home(self) -> Path | None:
        """The home directory used for expansion."""
        return self._home if self._home is not None else _default_home()

    @property
    def app_data(self) -> Path | None:
        """The application data directory used for ``%APPDATA%`` expansion."""
        if self._app_data is not None:
            return self._app_data
        return app_data_dir(self._home)

    def resolve(self, template: str) -> Path | None:
        """Expand a path template into an absolute path.

        Args:
            template: The template to expand.

        Returns:
            The absolute path, or None if the template is empty or its
            base directory cannot be determined.
        """
        if not template:
            return None

        if template == _HOME_PREFIX or template.startswith(("~/", "~\\")):
            home = self.home
            if home is None:
                return None
            return home / _strip_separators(template[len(_HOME_PREFIX):])

        if template.upper().startswith(_APPDATA_PREFIX):
            base = self.app_data
            if base is None:
                return None
            return base / _strip_separators(template[len(_APPDATA_PREFIX):])

        candidate = Path(template)
        if candidate.is_absolute():
            return candidate

        home = self.home
        if home is None:
            return None
        return home / candidate
