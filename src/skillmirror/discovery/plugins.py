"""Enumeration of installed Claude Code plugins.

Claude Code records installed plugins in
``~/.claude/plugins/installed_plugins.json``. Two layouts exist::

    {"plugins": {"name@marketplace": {"installPath": "..."}}}           # v1
    {"version": 2, "plugins": {"name@marketplace": [{"installPath": "..."}]}}

Each plugin may ship a ``skills`` directory that onboarding scans like
any other tool.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

INSTALLED_PLUGINS_FILE = Path(".claude") / "plugins" / "installed_plugins.json"


@dataclass(frozen=True)
class InstalledPlugin:
    """One installed plugin.

    Attributes:
        plugin_id: Full identifier (e.g., "pdf@anthropic-skills").
        display_name: Identifier without the marketplace suffix.
        install_path: Absolute path of the plugin's install tree.
    """

    plugin_id: str
    display_name: str
    install_path: Path


def _install_paths(entry: Any) -> list[str]:
    records = entry if isinstance(entry, list) else [entry]
    paths: list[str] = []
    for record in records:
        if isinstance(record, dict):
            path = record.get("installPath")
            if isinstance(path, str) and path:
                paths.append(path)
    return paths


def parse_installed_plugins(data: Any) -> list[InstalledPlugin]:
    """Extract plugins from a parsed ``installed_plugins.json`` document.

    Entries without an install path are ignored. When a plugin lists
    several installs (v2, per scope), each becomes its own record.
    """
    if not isinstance(data, dict):
        return []
    plugins = data.get("plugins")
    if not isinstance(plugins, dict):
        return []

    found: list[InstalledPlugin] = []
    for plugin_id in sorted(plugins):
        display = plugin_id.split("@", 1)[0]
        for raw_path in _install_paths(plugins[plugin_id]):
            found.append(InstalledPlugin(
                plugin_id=plugin_id,
                display_name=display,
                install_path=Path(raw_path).expanduser(),
            ))
    return found


def installed_plugins(home: Path | None = None) -> list[InstalledPlugin]:
    """Return the installed plugins, or an empty list if none are known.

    Args:
        home: Override the home directory (for testing).
    """
    base = home if home is not None else Path.home()
    registry = base / INSTALLED_PLUGINS_FILE
    if not registry.is_file():
        return []
    try:
        data = json.loads(registry.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable plugin registry %s: %s", registry, exc)
        return []
    return parse_installed_plugins(data)
