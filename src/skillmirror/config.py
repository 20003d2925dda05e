"""User configuration: canonical repository location and custom tools.

Configuration lives in a YAML file, by default
``<app data>/com.skillmirror.app/config.yaml``. The ``SKILLMIRROR_CONFIG``
environment variable or the CLI ``--config`` option select another file.
A missing file means defaults::

    central_repo_path: ~/Library/Application Support/com.skillmirror.app/skills
    state_path: ~/Library/Application Support/com.skillmirror.app/state.json
    custom_tools:
      - key: my_agent
        display_name: My Agent
        skills_dir: ~/.my-agent/skills
        detect_dir: ~/.my-agent
        force_copy: false

Path values accept the same templates as tool tables (``~/``,
``%APPDATA%/``, absolute paths).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from skillmirror.discovery.paths import APP_DIR_NAME, PathResolver
from skillmirror.discovery.tool_registry import CustomTool
from skillmirror.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SKILLMIRROR_CONFIG"
CONFIG_FILENAME = "config.yaml"
STATE_FILENAME = "state.json"
CENTRAL_DIRNAME = "skills"


@dataclass
class Settings:
    """Resolved configuration.

    Attributes:
        central_repo_path: Root of the canonical skill repository.
        state_path: JSON file holding managed skills and targets.
        custom_tools: Tools declared by the user.
        config_path: The file these settings were read from, if any.
    """

    central_repo_path: Path
    state_path: Path
    custom_tools: list[CustomTool] = field(default_factory=list)
    config_path: Path | None = None


def app_home(resolver: PathResolver) -> Path:
    """Directory holding this application's files."""
    base = resolver.app_data
    if base is None:
        raise ConfigError("cannot determine the application data directory")
    return base / APP_DIR_NAME


def default_config_path(resolver: PathResolver | None = None) -> Path:
    """Config file location, honouring ``SKILLMIRROR_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return app_home(resolver or PathResolver()) / CONFIG_FILENAME


def _require_str(entry: dict[str, Any], key: str, index: int) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"custom_tools[{index}]: '{key}' must be a non-empty string")
    return value


def _parse_custom_tools(raw: Any) -> list[CustomTool]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigError("custom_tools must be a list")

    tools: list[CustomTool] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ConfigError(f"custom_tools[{index}] must be a mapping")
        key = _require_str(entry, "key", index)
        skills_dir = _require_str(entry, "skills_dir", index)
        display = entry.get("display_name") or key
        detect = entry.get("detect_dir") or skills_dir
        force_copy = entry.get("force_copy", False)
        if not isinstance(force_copy, bool):
            raise ConfigError(f"custom_tools[{index}]: 'force_copy' must be true or false")
        tools.append(CustomTool(
            key=key,
            display_name=str(display),
            skills_dir=skills_dir,
            detect_dir=str(detect),
            force_copy=force_copy,
        ))
    return tools


def _resolve_path(value: Any, name: str, resolver: PathResolver, default: Path) -> Path:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(f"{name} must be a string path")
    resolved = resolver.resolve(value)
    if resolved is None:
        raise ConfigError(f"{name}: cannot resolve {value!r}")
    return resolved


def settings_from_dict(
    data: dict[str, Any], resolver: PathResolver | None = None,
) -> Settings:
    """Build settings from a parsed config mapping.

    Raises:
        ConfigError: On wrong value types or incomplete tool entries.
    """
    resolver = resolver or PathResolver()
    home = app_home(resolver)
    return Settings(
        central_repo_path=_resolve_path(
            data.get("central_repo_path"), "central_repo_path", resolver,
            home / CENTRAL_DIRNAME,
        ),
        state_path=_resolve_path(
            data.get("state_path"), "state_path", resolver, home / STATE_FILENAME,
        ),
        custom_tools=_parse_custom_tools(data.get("custom_tools")),
    )


def load_settings(
    path: Path | None = None, resolver: PathResolver | None = None,
) -> Settings:
    """Load settings from YAML, falling back to defaults if the file is absent.

    Args:
        path: Config file; defaults to ``default_config_path()``.
        resolver: Path resolver for templates (for testing).

    Raises:
        ConfigError: If the file is unreadable, not valid YAML, or invalid.
    """
    resolver = resolver or PathResolver()
    path = path or default_config_path(resolver)

    data: Any = {}
    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except OSError as exc:
            raise ConfigError(f"cannot read {path}: {exc.strerror or exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    else:
        logger.debug("No config at %s; using defaults", path)

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top-level value must be a mapping")

    settings = settings_from_dict(data, resolver)
    settings.config_path = path
    return settings
