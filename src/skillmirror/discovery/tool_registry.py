"""Static registry of AI coding tools and their skill directory conventions.

Each ``ToolAdapter`` describes where one consumer tool expects skills to
live (``relative_skills_dir``) and which directory proves the tool is
installed (``relative_detect_dir``). Paths are templates expanded by
``PathResolver``: bare relative paths are home-relative, ``~/`` is the
home directory, ``%APPDATA%/`` is the platform configuration directory.

Built-in adapters are a fixed tuple built once at import. Custom tools
from the user's configuration, third-party skill stores, and Claude Code
plugins are turned into adapters at scan time.

Platform Notes:
    Amp, Kilo Code and Roo Code are detected through their VS Code
    extension storage under ``%APPDATA%/Code``; their skills live in the
    home directory like every other tool.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Tools whose targets are always copied; they do not follow symlinks.
COPY_ONLY_TOOLS: frozenset[str] = frozenset({"cursor"})

PLUGIN_KEY_PREFIX = "plugin::"


@dataclass(frozen=True)
class ToolAdapter:
    """Path conventions for one consumer tool.

    Attributes:
        key: Machine identifier (e.g., "claude_code").
        display_name: Human-readable name (e.g., "Claude Code").
        relative_skills_dir: Template of the directory holding skills.
        relative_detect_dir: Template of the directory whose existence
            means the tool is installed.
        is_custom: True for tools declared in the user's configuration.
        force_copy: True if the sync engine must never link for this tool.
    """

    key: str
    display_name: str
    relative_skills_dir: str
    relative_detect_dir: str
    is_custom: bool = False
    force_copy: bool = False


@dataclass(frozen=True)
class CustomTool:
    """A user-declared tool loaded from the configuration file."""

    key: str
    display_name: str
    skills_dir: str
    detect_dir: str
    force_copy: bool = False


@dataclass(frozen=True)
class ExtraSkillSource:
    """A third-party skill store scanned during onboarding.

    Unlike tools, a store has no separate detection directory: it is
    scanned whenever its skills directory exists.
    """

    key: str
    display_name: str
    skills_dir: str


def _build_builtin_tools() -> tuple[ToolAdapter, ...]:
    """Build the built-in tool table.

    Returns:
        Ordered tuple of adapters for every supported tool.
    """
    return (
        # -- Terminal agents --
        ToolAdapter("claude_code", "Claude Code", ".claude/skills", ".claude"),
        ToolAdapter("codex", "Codex", ".codex/skills", ".codex"),
        ToolAdapter("gemini_cli", "Gemini CLI", ".gemini/skills", ".gemini"),
        ToolAdapter(
            "opencode", "OpenCode",
            ".config/opencode/skill", ".config/opencode",
        ),
        ToolAdapter("goose", "Goose", ".config/goose/skills", ".config/goose"),
        ToolAdapter("droid", "Droid", ".factory/skills", ".factory"),
        ToolAdapter("clawdbot", "Clawdbot", ".clawdbot/skills", ".clawdbot"),
        # -- Editors --
        ToolAdapter(
            "cursor", "Cursor", ".cursor/skills", ".cursor", force_copy=True,
        ),
        ToolAdapter(
            "windsurf", "Windsurf",
            ".codeium/windsurf/skills", ".codeium/windsurf",
        ),
        ToolAdapter(
            "antigravity", "Antigravity",
            ".gemini/antigravity/skills", ".gemini/antigravity",
        ),
        ToolAdapter("github_copilot", "GitHub Copilot", ".copilot/skills", ".copilot"),
        # -- VS Code extensions --
        ToolAdapter("amp", "Amp", ".config/agents/skills", "%APPDATA%/Code"),
        ToolAdapter(
            "kilo_code", "Kilo Code", ".kilocode/skills",
            "%APPDATA%/Code/User/globalStorage/kilocode.kilo-code",
        ),
        ToolAdapter(
            "roo_code", "Roo Code", ".roo/skills",
            "%APPDATA%/Code/User/globalStorage/rooveterinaryinc.roo-cline",
        ),
    )


BUILTIN_TOOLS: tuple[ToolAdapter, ...] = _build_builtin_tools()

EXTRA_SKILL_SOURCES: tuple[ExtraSkillSource, ...] = (
    ExtraSkillSource("cc_switch", "CC Switch", "~/.cc-switch/skills"),
)


def builtin_tool_by_key(key: str) -> ToolAdapter | None:
    """Find a built-in adapter by its exact key."""
    for adapter in BUILTIN_TOOLS:
        if adapter.key == key:
            return adapter
    return None


def find_adapter(key: str, adapters: Iterable[ToolAdapter]) -> ToolAdapter | None:
    """Find an adapter by key, ignoring case."""
    wanted = key.lower()
    for adapter in adapters:
        if adapter.key.lower() == wanted:
            return adapter
    return None


def is_copy_only(tool_key: str) -> bool:
    """Return True if targets for this tool must always be copied."""
    return tool_key.lower() in COPY_ONLY_TOOLS


def adapter_for_custom_tool(tool: CustomTool) -> ToolAdapter:
    """Turn a configured custom tool into an adapter."""
    return ToolAdapter(
        key=tool.key,
        display_name=tool.display_name,
        relative_skills_dir=tool.skills_dir,
        relative_detect_dir=tool.detect_dir,
        is_custom=True,
        force_copy=tool.force_copy,
    )


def adapter_for_extra_source(source: ExtraSkillSource) -> ToolAdapter:
    """Turn a third-party skill store into an adapter."""
    return ToolAdapter(
        key=source.key,
        display_name=source.display_name,
        relative_skills_dir=source.skills_dir,
        relative_detect_dir=source.skills_dir,
    )


def adapter_for_plugin(plugin_id: str, display_name: str, skills_dir: str) -> ToolAdapter:
    """Build the adapter for an installed plugin's ``skills`` directory.

    Plugin install trees are managed by the plugin system, so targets in
    them are never linked.
    """
    return ToolAdapter(
        key=f"{PLUGIN_KEY_PREFIX}{plugin_id}",
        display_name=f"Plugin: {display_name}",
        relative_skills_dir=skills_dir,
        relative_detect_dir=skills_dir,
        force_copy=True,
    )


def all_adapters(custom_tools: Iterable[CustomTool] = ()) -> list[ToolAdapter]:
    """Return built-in adapters followed by the user's custom tools.

    Args:
        custom_tools: Tools declared in the configuration file.

    Returns:
        Adapter list. Custom tools reusing a built-in key are skipped.
    """
    adapters = list(BUILTIN_TOOLS)
    taken = {a.key.lower() for a in adapters}
    for tool in custom_tools:
        if tool.key.lower() in taken:
            logger.warning("Custom tool %r shadows an existing tool key; skipped", tool.key)
            continue
        taken.add(tool.key.lower())
        adapters.append(adapter_for_custom_tool(tool))
    return adapters
