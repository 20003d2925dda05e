"""Onboarding discovery of skills already present in AI tool directories.

Scans the skill directories of every known AI coding tool (Claude Code,
Codex, Cursor, Windsurf, etc.), third-party skill stores, and Claude Code
plugins, then groups same-named skills and flags content conflicts.

Public API::

    from skillmirror.discovery import OnboardingPlanner

    planner = OnboardingPlanner()
    plan = planner.build_plan()
    for group in plan.groups:
        print(f"{group.name}: {len(group.variants)} variant(s)")
"""

from __future__ import annotations

from skillmirror.discovery.models import (
    DetectedSkill,
    FilterContext,
    OnboardingGroup,
    OnboardingPlan,
    OnboardingVariant,
)
from skillmirror.discovery.onboarding import (
    OnboardingPlanner,
    build_groups,
    build_onboarding_plan_async,
    filter_detected,
    managed_target_key,
)
from skillmirror.discovery.paths import PathResolver
from skillmirror.discovery.scanner import scan_tool_dir
from skillmirror.discovery.tool_registry import (
    BUILTIN_TOOLS,
    CustomTool,
    ToolAdapter,
    all_adapters,
)

__all__ = [
    "BUILTIN_TOOLS",
    "CustomTool",
    "DetectedSkill",
    "FilterContext",
    "OnboardingGroup",
    "OnboardingPlan",
    "OnboardingPlanner",
    "OnboardingVariant",
    "PathResolver",
    "ToolAdapter",
    "all_adapters",
    "build_groups",
    "build_onboarding_plan_async",
    "filter_detected",
    "managed_target_key",
    "scan_tool_dir",
]
