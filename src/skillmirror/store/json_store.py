"""JSON-file store of managed skills and sync targets.

The state file is small and rewritten whole on every save. Output is
deterministic: skills are sorted by name, targets by ``(skill_id, tool)``,
and all keys are sorted, so two stores with the same content produce
byte-identical files.

Example::

    store = JsonSkillStore.open(Path("state.json"))
    store.add_skill(Skill(id=new_id(), name="pdf-tools", central_path=...))
    store.save()
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from skillmirror.exceptions import StoreError
from skillmirror.store.models import Skill, SkillTarget, new_id, now_ms

logger = logging.getLogger(__name__)

STATE_VERSION = "1"


class SkillStore(Protocol):
    """What onboarding needs from the managed state."""

    def list_managed_target_paths(self) -> list[tuple[str, str]]: ...

    def list_managed_skill_names(self) -> list[str]: ...


class JsonSkillStore:
    """Managed skills and targets persisted in a single JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._skills: dict[str, Skill] = {}
        self._targets: dict[str, SkillTarget] = {}

    # -- Loading and saving -------------------------------------------------

    @classmethod
    def open(cls, path: Path) -> JsonSkillStore:
        """Load the store at ``path``; a missing file yields an empty store.

        Raises:
            StoreError: If the file exists but is not a valid state file.
        """
        store = cls(path)
        store.load()
        return store

    def load(self) -> None:
        self._skills.clear()
        self._targets.clear()
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise StoreError(self.path, exc.strerror or str(exc)) from exc
        except json.JSONDecodeError as exc:
            raise StoreError(self.path, f"invalid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise StoreError(self.path, "top-level value must be an object")

        for raw in data.get("skills", []):
            if isinstance(raw, dict):
                skill = Skill.from_dict(raw)
                self._skills[skill.id] = skill
        for raw in data.get("targets", []):
            if isinstance(raw, dict):
                target = SkillTarget.from_dict(raw)
                self._targets[target.id] = target

    def to_dict(self) -> dict[str, Any]:
        skills = sorted(self._skills.values(), key=lambda s: (s.name, s.id))
        targets = sorted(self._targets.values(), key=lambda t: (t.skill_id, t.tool, t.id))
        return {
            "version": STATE_VERSION,
            "skills": [s.to_dict() for s in skills],
            "targets": [t.to_dict() for t in targets],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    def save(self) -> None:
        """Write the store to disk, creating parent directories.

        Raises:
            StoreError: If the file cannot be written.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(self.to_json(), encoding="utf-8")
        except OSError as exc:
            raise StoreError(self.path, exc.strerror or str(exc)) from exc

    # -- Skills -------------------------------------------------------------

    @property
    def skills(self) -> list[Skill]:
        return sorted(self._skills.values(), key=lambda s: s.name)

    def add_skill(self, skill: Skill) -> None:
        """Add or replace a skill record."""
        self._skills[skill.id] = skill

    def get_skill_by_name(self, name: str) -> Skill | None:
        for skill in self._skills.values():
            if skill.name == name:
                return skill
        return None

    # -- Targets ------------------------------------------------------------

    @property
    def targets(self) -> list[SkillTarget]:
        return sorted(self._targets.values(), key=lambda t: (t.skill_id, t.tool))

    def targets_for_skill(self, skill_id: str) -> list[SkillTarget]:
        return [t for t in self.targets if t.skill_id == skill_id]

    def upsert_target(
        self,
        skill_id: str,
        tool: str,
        target_path: str,
        mode: str,
        status: str = "synced",
        error_message: str | None = None,
    ) -> SkillTarget:
        """Record the state of the single target a skill has for a tool."""
        existing = next(
            (t for t in self._targets.values() if t.skill_id == skill_id and t.tool == tool),
            None,
        )
        synced_at = now_ms() if status == "synced" else None
        if existing is None:
            existing = SkillTarget(id=new_id(), skill_id=skill_id, tool=tool, target_path=target_path)
            self._targets[existing.id] = existing
        existing.target_path = target_path
        existing.mode = mode
        existing.status = status
        existing.error_message = error_message
        if synced_at is not None:
            existing.synced_at = synced_at
            skill = self._skills.get(skill_id)
            if skill is not None:
                skill.last_sync_at = synced_at
        return existing

    def remove_target(self, target_path: str) -> list[SkillTarget]:
        """Forget every target recorded at ``target_path``."""
        removed = [t for t in self._targets.values() if t.target_path == target_path]
        for t in removed:
            del self._targets[t.id]
        return removed

    # -- SkillStore protocol ------------------------------------------------

    def list_managed_target_paths(self) -> list[tuple[str, str]]:
        return [(t.tool, t.target_path) for t in self.targets]

    def list_managed_skill_names(self) -> list[str]:
        return [s.name for s in self.skills]
