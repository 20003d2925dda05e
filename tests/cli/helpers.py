"""Shared test helpers for CLI tests."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass
class CliEnv:
    """Paths of one isolated CLI environment."""

    home: Path
    config: Path
    central: Path
    state: Path

    def args(self, *command: str) -> list[str]:
        """Prefix a command with the group-level ``--config`` option."""
        return ["--config", str(self.config), *command]

    def read_state(self) -> dict[str, Any]:
        return json.loads(self.state.read_text())
