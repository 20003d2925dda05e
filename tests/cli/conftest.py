"""Shared fixtures for CLI tests.

Every command runs against a fake home and an explicit config file whose
canonical repository and state file live under ``tmp_path``.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from tests.cli.helpers import CliEnv


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def cli_env(tmp_path: Path, fake_home: Path) -> CliEnv:
    """Write a config pointing the canonical repo and state into tmp_path."""
    central = tmp_path / "central"
    state = tmp_path / "state.json"
    config = tmp_path / "config.yaml"
    config.write_text(f"central_repo_path: {central}\nstate_path: {state}\n")
    return CliEnv(home=fake_home, config=config, central=central, state=state)
