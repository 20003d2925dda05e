"""Shared fixtures for skillmirror tests."""

import pathlib

import pytest


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests away from the developer's real configuration."""
    monkeypatch.delenv("SKILLMIRROR_CONFIG", raising=False)
    monkeypatch.delenv("SKILLMIRROR_LOG_LEVEL", raising=False)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)


@pytest.fixture
def fake_home(tmp_path: pathlib.Path) -> pathlib.Path:
    """An empty directory standing in for the user's home."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def sample_skill_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """A small skill directory with a nested file and a .git folder."""
    skill_dir = tmp_path / "src" / "pdf-tools"
    (skill_dir / "scripts").mkdir(parents=True)
    (skill_dir / "SKILL.md").write_text("---\nname: pdf-tools\n---\n\nExtract PDF text.\n")
    (skill_dir / "scripts" / "extract.py").write_text("print('extract')\n")
    (skill_dir / ".git").mkdir()
    (skill_dir / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    return skill_dir
