"""Hybrid sync of canonical skills into tool directories.

Public API::

    from skillmirror.sync import sync_dir_for_tool_with_overwrite

    outcome = sync_dir_for_tool_with_overwrite(
        "claude_code", central / "pdf-tools", home / ".claude/skills/pdf-tools", False,
    )
    print(outcome.mode_used, outcome.replaced)
"""

from __future__ import annotations

from skillmirror.sync.engine import (
    sync_dir_copy_with_overwrite,
    sync_dir_for_tool_with_overwrite,
    sync_dir_hybrid,
    sync_dir_hybrid_with_overwrite,
)
from skillmirror.sync.fsops import copy_dir_recursive, remove_path
from skillmirror.sync.models import SyncMode, SyncOutcome
from skillmirror.sync.strategies import strategy_chain

__all__ = [
    "SyncMode",
    "SyncOutcome",
    "copy_dir_recursive",
    "remove_path",
    "strategy_chain",
    "sync_dir_copy_with_overwrite",
    "sync_dir_for_tool_with_overwrite",
    "sync_dir_hybrid",
    "sync_dir_hybrid_with_overwrite",
]
