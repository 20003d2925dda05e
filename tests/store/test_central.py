"""Tests for importing onboarded skills into the canonical repository."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from skillmirror.core.fingerprint import fingerprint_dir
from skillmirror.exceptions import SyncIOError, TargetExistsError
from skillmirror.store.central import import_into_central
from skillmirror.store.json_store import JsonSkillStore


@pytest.fixture
def store(tmp_path: Path) -> JsonSkillStore:
    return JsonSkillStore(tmp_path / "state.json")


class TestImportIntoCentral:
    """Copy, hash and record."""

    def test_imports(self, sample_skill_dir: Path, tmp_path: Path, store: JsonSkillStore) -> None:
        central = tmp_path / "central"
        skill = import_into_central(sample_skill_dir, "pdf-tools", central, store)

        dest = central / "pdf-tools"
        assert (dest / "SKILL.md").exists()
        assert not (dest / ".git").exists()
        assert skill.central_path == str(dest)
        assert skill.source_ref == str(sample_skill_dir)
        assert skill.content_hash == fingerprint_dir(sample_skill_dir)
        assert store.get_skill_by_name("pdf-tools") == skill

    def test_existing_name_rejected(
        self, sample_skill_dir: Path, tmp_path: Path, store: JsonSkillStore,
    ) -> None:
        central = tmp_path / "central"
        import_into_central(sample_skill_dir, "pdf-tools", central, store)
        with pytest.raises(TargetExistsError):
            import_into_central(sample_skill_dir, "pdf-tools", tmp_path / "other", store)

    def test_existing_dir_rejected(
        self, sample_skill_dir: Path, tmp_path: Path, store: JsonSkillStore,
    ) -> None:
        central = tmp_path / "central"
        (central / "pdf-tools").mkdir(parents=True)
        with pytest.raises(TargetExistsError):
            import_into_central(sample_skill_dir, "pdf-tools", central, store)
        assert store.skills == []

    def test_missing_source(self, tmp_path: Path, store: JsonSkillStore) -> None:
        with pytest.raises(SyncIOError):
            import_into_central(tmp_path / "gone", "x", tmp_path / "central", store)

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privilege on Windows")
    def test_imports_through_link(
        self, sample_skill_dir: Path, tmp_path: Path, store: JsonSkillStore,
    ) -> None:
        link = tmp_path / "link"
        os.symlink(sample_skill_dir, link, target_is_directory=True)
        skill = import_into_central(link, "pdf-tools", tmp_path / "central", store)
        assert (Path(skill.central_path) / "scripts" / "extract.py").exists()
        assert not Path(skill.central_path).is_symlink()
