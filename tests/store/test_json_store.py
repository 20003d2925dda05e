"""Tests for the JSON state store and its records."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from skillmirror.exceptions import StoreError
from skillmirror.store.json_store import STATE_VERSION, JsonSkillStore
from skillmirror.store.models import Skill, SkillTarget


def _skill(name: str, skill_id: str | None = None) -> Skill:
    return Skill(id=skill_id or f"id-{name}", name=name, central_path=f"/central/{name}")


# ---------------------------------------------------------------------------
# Loading and saving
# ---------------------------------------------------------------------------


class TestPersistence:
    """State file round trips and error handling."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        store = JsonSkillStore.open(tmp_path / "state.json")
        assert store.skills == []
        assert store.targets == []

    def test_save_and_reload(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "state.json"
        store = JsonSkillStore(path)
        store.add_skill(_skill("pdf-tools"))
        store.upsert_target("id-pdf-tools", "cursor", "/home/u/.cursor/skills/pdf-tools", "copy")
        store.save()

        reloaded = JsonSkillStore.open(path)
        assert reloaded.get_skill_by_name("pdf-tools") == store.get_skill_by_name("pdf-tools")
        assert reloaded.targets == store.targets

    def test_output_deterministic(self, tmp_path: Path) -> None:
        a = JsonSkillStore(tmp_path / "a.json")
        b = JsonSkillStore(tmp_path / "b.json")
        for name in ("zeta", "alpha"):
            a.add_skill(_skill(name))
        for name in ("alpha", "zeta"):
            b.add_skill(_skill(name))
        assert a.to_json() == b.to_json()
        data = json.loads(a.to_json())
        assert data["version"] == STATE_VERSION
        assert [s["name"] for s in data["skills"]] == ["alpha", "zeta"]

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_text("{broken")
        with pytest.raises(StoreError, match="invalid JSON"):
            JsonSkillStore.open(path)

    def test_non_object(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_text("[]")
        with pytest.raises(StoreError):
            JsonSkillStore.open(path)

    def test_tolerates_missing_fields(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_text(json.dumps({
            "skills": [{"id": "1", "name": "pdf", "central_path": "/c/pdf"}],
            "targets": [{"id": "t", "skill_id": "1", "tool": "codex", "target_path": "/x"}],
        }))
        store = JsonSkillStore.open(path)
        skill = store.get_skill_by_name("pdf")
        assert skill is not None and skill.status == "active"
        assert store.targets[0].status == "pending"
        assert store.targets[0].mode == "symlink"


# ---------------------------------------------------------------------------
# Targets
# ---------------------------------------------------------------------------


class TestTargets:
    """One target per skill and tool."""

    def test_upsert_updates_in_place(self, tmp_path: Path) -> None:
        store = JsonSkillStore(tmp_path / "s.json")
        store.add_skill(_skill("pdf"))
        first = store.upsert_target("id-pdf", "codex", "/a", "symlink")
        second = store.upsert_target("id-pdf", "codex", "/b", "copy")
        assert first.id == second.id
        assert [t.target_path for t in store.targets_for_skill("id-pdf")] == ["/b"]

    def test_successful_sync_stamps_skill(self, tmp_path: Path) -> None:
        store = JsonSkillStore(tmp_path / "s.json")
        store.add_skill(_skill("pdf"))
        target = store.upsert_target("id-pdf", "codex", "/a", "symlink")
        assert target.synced_at is not None
        assert store.get_skill_by_name("pdf").last_sync_at == target.synced_at

    def test_error_status_keeps_last_sync(self, tmp_path: Path) -> None:
        store = JsonSkillStore(tmp_path / "s.json")
        store.add_skill(_skill("pdf"))
        target = store.upsert_target(
            "id-pdf", "codex", "/a", "symlink", status="error", error_message="boom",
        )
        assert target.synced_at is None
        assert target.error_message == "boom"
        assert store.get_skill_by_name("pdf").last_sync_at is None

    def test_remove_target(self, tmp_path: Path) -> None:
        store = JsonSkillStore(tmp_path / "s.json")
        store.upsert_target("s1", "codex", "/a", "symlink")
        store.upsert_target("s1", "cursor", "/b", "copy")
        removed = store.remove_target("/a")
        assert [t.tool for t in removed] == ["codex"]
        assert store.list_managed_target_paths() == [("cursor", "/b")]

    def test_protocol_views(self, tmp_path: Path) -> None:
        store = JsonSkillStore(tmp_path / "s.json")
        store.add_skill(_skill("b"))
        store.add_skill(_skill("a"))
        store.upsert_target("id-a", "codex", "/t", "symlink")
        assert store.list_managed_skill_names() == ["a", "b"]
        assert store.list_managed_target_paths() == [("codex", "/t")]


class TestRecords:
    """Record mapping."""

    def test_target_dict_keys(self) -> None:
        target = SkillTarget(id="t", skill_id="s", tool="codex", target_path="/x")
        assert SkillTarget.from_dict(target.to_dict()) == target

    def test_wrong_types_fall_back(self) -> None:
        skill = Skill.from_dict({"id": 1, "name": "x", "created_at": True})
        assert skill.id == ""
        assert skill.created_at == 0
