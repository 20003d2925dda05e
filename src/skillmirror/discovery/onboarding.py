"""Onboarding: find skills that already exist outside canonical management.

Scans every installed tool, third-party skill store and Claude Code
plugin for skill directories, removes anything already managed, and
groups what remains by name so that same-named skills with different
content surface as conflicts.

Planning Algorithm:
    1. Source resolution: tools whose detection directory exists, extra
       skill stores whose skills directory exists, plugins with a
       ``skills`` subdirectory. Each counts as one scanned source.
    2. Per source: scan, then filter against the ``FilterContext``. A
       source that fails to scan contributes nothing; the others proceed.
    3. Grouping: only after every source is done, group detections by
       name, fingerprint each variant, and annotate conflicts.

The scan is blocking. Async callers use ``build_onboarding_plan_async``,
which runs it in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from skillmirror.core.fingerprint import try_fingerprint
from skillmirror.discovery.models import (
    DetectedSkill,
    FilterContext,
    OnboardingGroup,
    OnboardingPlan,
    OnboardingVariant,
)
from skillmirror.discovery.paths import PathResolver
from skillmirror.discovery.plugins import InstalledPlugin, installed_plugins
from skillmirror.discovery.scanner import scan_tool_dir
from skillmirror.discovery.tool_registry import (
    EXTRA_SKILL_SOURCES,
    CustomTool,
    ExtraSkillSource,
    ToolAdapter,
    adapter_for_extra_source,
    adapter_for_plugin,
    all_adapters,
)
from skillmirror.exceptions import ScanError

logger = logging.getLogger(__name__)

Fingerprinter = Callable[[Path], str | None]
PluginLoader = Callable[[], list[InstalledPlugin]]


# ---------------------------------------------------------------------------
# Managed-target keys
# ---------------------------------------------------------------------------


def normalize_path_for_key(path: Path | str, case_insensitive: bool | None = None) -> str:
    """Normalize a path for managed-target comparison.

    Args:
        path: The path to normalize.
        case_insensitive: Fold case. Defaults to True on Windows only.
    """
    if case_insensitive is None:
        case_insensitive = os.name == "nt"
    normalized = os.path.normpath(str(path))
    return normalized.lower() if case_insensitive else normalized


def managed_target_key(
    tool: str, path: Path | str, case_insensitive: bool | None = None,
) -> str:
    """Build the lookup key identifying one tool's target path."""
    return f"{tool.lower()}\n{normalize_path_for_key(path, case_insensitive)}"


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


def _is_under(path: Path, base: Path) -> bool:
    return Path(os.path.normpath(path)).is_relative_to(os.path.normpath(base))


def filter_detected(
    detected: Iterable[DetectedSkill], ctx: FilterContext | None,
) -> list[DetectedSkill]:
    """Drop detections that are already managed.

    A detection is dropped when its path or link target lies under the
    canonical root, when its ``(tool, path)`` matches a managed target, or
    when its name matches a managed skill.
    """
    detected = list(detected)
    if ctx is None or ctx.is_empty:
        return detected

    kept: list[DetectedSkill] = []
    for skill in detected:
        if ctx.exclude_root is not None:
            if _is_under(skill.path, ctx.exclude_root):
                continue
            if skill.link_target is not None and _is_under(skill.link_target, ctx.exclude_root):
                continue
        if ctx.managed_targets is not None:
            if managed_target_key(skill.tool, skill.path) in ctx.managed_targets:
                continue
        if ctx.managed_names is not None and skill.name in ctx.managed_names:
            continue
        kept.append(skill)
    return kept


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------


def annotate_conflicts(name: str, variants: list[OnboardingVariant]) -> OnboardingGroup:
    """Compute ``has_conflict`` and per-variant ``conflicting_tools``.

    Variants without a fingerprint take no part in the comparison and
    get an empty ``conflicting_tools``.
    """
    tools_by_fingerprint: dict[str, list[str]] = {}
    for v in variants:
        if v.fingerprint is not None:
            tools_by_fingerprint.setdefault(v.fingerprint, []).append(v.tool)

    for v in variants:
        if v.fingerprint is None:
            v.conflicting_tools = []
            continue
        others: set[str] = set()
        for fp, tools in tools_by_fingerprint.items():
            if fp != v.fingerprint:
                others.update(tools)
        same = set(tools_by_fingerprint[v.fingerprint])
        v.conflicting_tools = sorted(others - same - {v.tool})

    return OnboardingGroup(
        name=name,
        has_conflict=len(tools_by_fingerprint) > 1,
        variants=variants,
    )


def build_groups(
    detected: Iterable[DetectedSkill],
    fingerprinter: Fingerprinter = try_fingerprint,
) -> list[OnboardingGroup]:
    """Group detections by exact name and annotate conflicts.

    Args:
        detected: Every surviving detection from every source.
        fingerprinter: Returns a directory's fingerprint or None.

    Returns:
        Groups sorted by name; variants sorted by tool, then path.
    """
    by_name: dict[str, list[OnboardingVariant]] = {}
    for skill in detected:
        variant = OnboardingVariant(skill=skill, fingerprint=fingerprinter(skill.path))
        by_name.setdefault(skill.name, []).append(variant)

    groups: list[OnboardingGroup] = []
    for name in sorted(by_name):
        variants = sorted(by_name[name], key=lambda v: (v.tool, str(v.path)))
        groups.append(annotate_conflicts(name, variants))
    return groups


# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------


class OnboardingPlanner:
    """Builds an ``OnboardingPlan`` from every configured skill source.

    Usage::

        planner = OnboardingPlanner()
        plan = planner.build_plan(filter_ctx, custom_tools)
        for group in plan.groups:
            print(group.name, group.has_conflict)

    Args:
        resolver: Expands tool path templates. Defaults to the real home.
        plugin_loader: Lists installed plugins. Defaults to reading
            Claude Code's plugin registry under the resolver's home.
        extra_sources: Third-party skill stores to scan.
        fingerprinter: Content hash function; None on failure.
    """

    def __init__(
        self,
        resolver: PathResolver | None = None,
        plugin_loader: PluginLoader | None = None,
        extra_sources: Sequence[ExtraSkillSource] = EXTRA_SKILL_SOURCES,
        fingerprinter: Fingerprinter = try_fingerprint,
    ) -> None:
        self.resolver = resolver or PathResolver()
        self._plugin_loader = plugin_loader
        self.extra_sources = tuple(extra_sources)
        self.fingerprinter = fingerprinter

    def _load_plugins(self) -> list[InstalledPlugin]:
        if self._plugin_loader is not None:
            return self._plugin_loader()
        return installed_plugins(home=self.resolver.home)

    def resolve_sources(
        self, custom_tools: Iterable[CustomTool] = (),
    ) -> list[tuple[ToolAdapter, Path | None]]:
        """Return ``(adapter, skills_dir)`` for every source present on disk.

        An installed tool whose skills template does not resolve is still
        listed, with ``None`` in place of its skills dir, so it counts as
        scanned.
        """
        sources: list[tuple[ToolAdapter, Path | None]] = []

        for adapter in all_adapters(custom_tools):
            detect_dir = self.resolver.resolve(adapter.relative_detect_dir)
            if detect_dir is None or not detect_dir.exists():
                continue
            sources.append((adapter, self.resolver.resolve(adapter.relative_skills_dir)))

        for source in self.extra_sources:
            skills_dir = self.resolver.resolve(source.skills_dir)
            if skills_dir is not None and skills_dir.exists():
                sources.append((adapter_for_extra_source(source), skills_dir))

        for plugin in self._load_plugins():
            skills_dir = plugin.install_path / "skills"
            if not skills_dir.exists():
                continue
            adapter = adapter_for_plugin(
                plugin.plugin_id, plugin.display_name, str(skills_dir),
            )
            sources.append((adapter, skills_dir))

        return sources

    def scan_sources(
        self,
        sources: Iterable[tuple[ToolAdapter, Path | None]],
        filter_ctx: FilterContext | None = None,
    ) -> list[DetectedSkill]:
        """Scan and filter each source, isolating per-source failures."""
        detected: list[DetectedSkill] = []
        for adapter, skills_dir in sources:
            if skills_dir is None:
                continue
            try:
                found = scan_tool_dir(adapter, skills_dir)
            except ScanError as exc:
                logger.warning("Skipping %s: %s", adapter.display_name, exc)
                continue
            detected.extend(filter_detected(found, filter_ctx))
        return detected

    def build_plan(
        self,
        filter_ctx: FilterContext | None = None,
        custom_tools: Iterable[CustomTool] = (),
    ) -> OnboardingPlan:
        """Scan all sources and group what they hold.

        Args:
            filter_ctx: Exclusion policy built from the managed state.
            custom_tools: Tools declared in the user's configuration.

        Returns:
            The complete plan.
        """
        sources = self.resolve_sources(custom_tools)
        detected = self.scan_sources(sources, filter_ctx)
        groups = build_groups(detected, self.fingerprinter)
        logger.info(
            "Onboarding scan: %d sources, %d skills, %d groups",
            len(sources), len(detected), len(groups),
        )
        return OnboardingPlan(
            total_tools_scanned=len(sources),
            total_skills_found=len(detected),
            groups=groups,
        )


async def build_onboarding_plan_async(
    planner: OnboardingPlanner,
    filter_ctx: FilterContext | None = None,
    custom_tools: Iterable[CustomTool] = (),
) -> OnboardingPlan:
    """Run ``planner.build_plan`` in a worker thread."""
    return await asyncio.to_thread(planner.build_plan, filter_ctx, list(custom_tools))
