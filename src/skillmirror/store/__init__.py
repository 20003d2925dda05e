"""Managed-skill state: canonical skills and their per-tool sync targets."""

from __future__ import annotations

from skillmirror.store.accessors import (
    build_filter_context,
    managed_names_or_empty,
    managed_target_keys_or_empty,
)
from skillmirror.store.central import import_into_central
from skillmirror.store.json_store import JsonSkillStore, SkillStore
from skillmirror.store.models import Skill, SkillTarget

__all__ = [
    "JsonSkillStore",
    "Skill",
    "SkillStore",
    "SkillTarget",
    "build_filter_context",
    "import_into_central",
    "managed_names_or_empty",
    "managed_target_keys_or_empty",
]
