"""Result types for the hybrid sync engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class SyncMode(str, Enum):
    """How a target was materialized, cheapest first."""

    SYMLINK = "symlink"
    JUNCTION = "junction"
    COPY = "copy"


@dataclass(frozen=True)
class SyncOutcome:
    """Result of one sync call.

    Attributes:
        mode_used: The mechanism that produced (or already provided) the target.
        target_path: The materialized path.
        replaced: True if an existing target was removed first.
    """

    mode_used: SyncMode
    target_path: Path
    replaced: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode_used": self.mode_used.value,
            "target_path": str(self.target_path),
            "replaced": self.replaced,
        }
