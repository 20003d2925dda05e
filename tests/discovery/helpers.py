"""Shared test helpers for creating fake tool installations.

Each helper builds a minimal but realistic directory layout under a fake
home so that onboarding can be exercised without touching the real one.
Used by the scanner, onboarding and CLI tests.
"""

from __future__ import annotations

import json
from pathlib import Path


def write_skill(skill_dir: Path, body: str = "Do the thing.\n") -> Path:
    """Create a skill directory holding a single SKILL.md."""
    skill_dir.mkdir(parents=True, exist_ok=True)
    (skill_dir / "SKILL.md").write_text(f"---\nname: {skill_dir.name}\n---\n\n{body}")
    return skill_dir


def create_claude_home(home: Path, skills: dict[str, str] | None = None) -> Path:
    """Create a fake Claude Code installation; returns its skills dir."""
    skills_dir = home / ".claude" / "skills"
    skills_dir.mkdir(parents=True, exist_ok=True)
    for name, body in (skills or {}).items():
        write_skill(skills_dir / name, body)
    return skills_dir


def create_codex_home(home: Path, skills: dict[str, str] | None = None) -> Path:
    """Create a fake Codex installation with its reserved .system dir."""
    skills_dir = home / ".codex" / "skills"
    skills_dir.mkdir(parents=True, exist_ok=True)
    write_skill(skills_dir / ".system", "Built into Codex.\n")
    for name, body in (skills or {}).items():
        write_skill(skills_dir / name, body)
    return skills_dir


def create_cursor_home(home: Path, skills: dict[str, str] | None = None) -> Path:
    """Create a fake Cursor installation; returns its skills dir."""
    skills_dir = home / ".cursor" / "skills"
    skills_dir.mkdir(parents=True, exist_ok=True)
    for name, body in (skills or {}).items():
        write_skill(skills_dir / name, body)
    return skills_dir


def create_cc_switch_store(home: Path, skills: dict[str, str] | None = None) -> Path:
    """Create a fake CC Switch skill store; returns its skills dir."""
    skills_dir = home / ".cc-switch" / "skills"
    skills_dir.mkdir(parents=True, exist_ok=True)
    for name, body in (skills or {}).items():
        write_skill(skills_dir / name, body)
    return skills_dir


def create_plugin(
    home: Path, plugin_id: str, skills: dict[str, str] | None = None, version: int = 2,
) -> Path:
    """Install a fake Claude Code plugin and register it.

    Returns the plugin's install path.
    """
    install_path = home / ".claude" / "plugins" / "cache" / plugin_id.replace("@", "-")
    skills_dir = install_path / "skills"
    skills_dir.mkdir(parents=True, exist_ok=True)
    for name, body in (skills or {}).items():
        write_skill(skills_dir / name, body)

    registry = home / ".claude" / "plugins" / "installed_plugins.json"
    data = json.loads(registry.read_text()) if registry.exists() else {"plugins": {}}
    record = {"installPath": str(install_path), "scope": "user"}
    if version == 2:
        data["version"] = 2
        data["plugins"][plugin_id] = [record]
    else:
        data["plugins"][plugin_id] = record
    registry.write_text(json.dumps(data))
    return install_path


def create_central_repo(app_data: Path, skills: dict[str, str] | None = None) -> Path:
    """Create the canonical repository under an app data directory."""
    central = app_data / "com.skillmirror.app" / "skills"
    central.mkdir(parents=True, exist_ok=True)
    for name, body in (skills or {}).items():
        write_skill(central / name, body)
    return central
