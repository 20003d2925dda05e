"""Data models for the discovery module.

Contains the records produced while onboarding: individual detected skill
directories, their fingerprinted variants, same-name groups, the aggregate
plan, and the exclusion policy applied during a scan. None of these are
persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class DetectedSkill:
    """A candidate skill directory found under one tool's skills root.

    Attributes:
        tool: Key of the tool whose directory held the skill.
        tool_display: Display name of that tool.
        name: Directory name, used as the skill name.
        path: Absolute path of the entry.
        is_link: True if the entry is a symlink or junction.
        link_target: Where the link points, when it could be read.
    """

    tool: str
    tool_display: str
    name: str
    path: Path
    is_link: bool = False
    link_target: Path | None = None


@dataclass
class OnboardingVariant:
    """A detected skill enriched with its fingerprint and conflicts.

    Attributes:
        skill: The underlying detection.
        fingerprint: Content hash, or None if hashing failed.
        conflicting_tools: Tools in the same group whose content differs.
    """

    skill: DetectedSkill
    fingerprint: str | None = None
    conflicting_tools: list[str] = field(default_factory=list)

    @property
    def tool(self) -> str:
        return self.skill.tool

    @property
    def name(self) -> str:
        return self.skill.name

    @property
    def path(self) -> Path:
        return self.skill.path

    def to_dict(self) -> dict[str, Any]:
        skill = self.skill
        return {
            "tool": skill.tool,
            "tool_display": skill.tool_display,
            "name": skill.name,
            "path": str(skill.path),
            "fingerprint": self.fingerprint,
            "is_link": skill.is_link,
            "link_target": str(skill.link_target) if skill.link_target else None,
            "conflicting_tools": list(self.conflicting_tools),
        }


@dataclass
class OnboardingGroup:
    """All variants sharing one skill name.

    ``has_conflict`` is True exactly when the variants carry more than one
    distinct known fingerprint.
    """

    name: str
    has_conflict: bool
    variants: list[OnboardingVariant] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "has_conflict": self.has_conflict,
            "variants": [v.to_dict() for v in self.variants],
        }


@dataclass
class OnboardingPlan:
    """Complete result of an onboarding scan.

    Attributes:
        total_tools_scanned: Sources whose directories existed.
        total_skills_found: Detections that survived filtering.
        groups: Same-name groups, sorted by name.
    """

    total_tools_scanned: int
    total_skills_found: int
    groups: list[OnboardingGroup] = field(default_factory=list)

    @property
    def conflict_count(self) -> int:
        return sum(1 for g in self.groups if g.has_conflict)

    def group(self, name: str) -> OnboardingGroup | None:
        for g in self.groups:
            if g.name == name:
                return g
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_tools_scanned": self.total_tools_scanned,
            "total_skills_found": self.total_skills_found,
            "groups": [g.to_dict() for g in self.groups],
        }


@dataclass(frozen=True)
class FilterContext:
    """Exclusion policy for one scan.

    Attributes:
        exclude_root: The canonical repository root. Anything under it is
            already managed.
        managed_targets: Keys from ``managed_target_key`` for every
            persisted sync target.
        managed_names: Names of every persisted managed skill.
    """

    exclude_root: Path | None = None
    managed_targets: frozenset[str] | None = None
    managed_names: frozenset[str] | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.exclude_root is None
            and self.managed_targets is None
            and self.managed_names is None
        )
