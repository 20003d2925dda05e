"""Persisted records: managed skills and their per-tool sync targets.

These are pure data holders with tolerant dict mapping. Fields missing
from a stored record take their defaults, so older state files keep
loading after new fields are added.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from typing import Any


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def new_id() -> str:
    return uuid.uuid4().hex


def _str(data: dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    return value if isinstance(value, str) else default


def _opt_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _int(data: dict[str, Any], key: str, default: int = 0) -> int:
    value = data.get(key)
    return value if isinstance(value, int) and not isinstance(value, bool) else default


def _opt_int(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    return value if isinstance(value, int) and not isinstance(value, bool) else None


# ---------------------------------------------------------------------------
# Skill: one entry in the canonical repository
# ---------------------------------------------------------------------------


@dataclass
class Skill:
    """A skill held in the canonical repository.

    Attributes:
        id: Opaque record identifier.
        name: Skill name, unique within the store.
        source_type: Where the skill came from ("local" for onboarded dirs).
        source_ref: Origin reference (e.g. the onboarded path).
        source_revision: Origin revision, when the source is versioned.
        central_path: Absolute path inside the canonical repository.
        content_hash: Fingerprint of the canonical copy.
        created_at: Creation time (ms since epoch).
        updated_at: Last modification time (ms since epoch).
        last_sync_at: Time of the last successful sync, if any.
        status: Lifecycle status ("active").
    """

    id: str
    name: str
    central_path: str
    source_type: str = "local"
    source_ref: str | None = None
    source_revision: str | None = None
    content_hash: str | None = None
    created_at: int = 0
    updated_at: int = 0
    last_sync_at: int | None = None
    status: str = "active"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Skill:
        return cls(
            id=_str(data, "id"),
            name=_str(data, "name"),
            central_path=_str(data, "central_path"),
            source_type=_str(data, "source_type", "local"),
            source_ref=_opt_str(data, "source_ref"),
            source_revision=_opt_str(data, "source_revision"),
            content_hash=_opt_str(data, "content_hash"),
            created_at=_int(data, "created_at"),
            updated_at=_int(data, "updated_at"),
            last_sync_at=_opt_int(data, "last_sync_at"),
            status=_str(data, "status", "active"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "source_type": self.source_type,
            "source_ref": self.source_ref,
            "source_revision": self.source_revision,
            "central_path": self.central_path,
            "content_hash": self.content_hash,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "last_sync_at": self.last_sync_at,
            "status": self.status,
        }


# ---------------------------------------------------------------------------
# SkillTarget: where one skill is materialized for one tool
# ---------------------------------------------------------------------------


@dataclass
class SkillTarget:
    """The declared state of one skill in one tool's directory.

    Attributes:
        id: Opaque record identifier.
        skill_id: Owning ``Skill.id``.
        tool: Tool key (e.g. "claude_code").
        target_path: Absolute target path.
        mode: Sync mode used ("symlink", "junction", "copy").
        status: "pending", "synced" or "error".
        synced_at: Time of the last successful sync, if any.
        error_message: Last failure message, if the status is "error".
    """

    id: str
    skill_id: str
    tool: str
    target_path: str
    mode: str = "symlink"
    status: str = "pending"
    synced_at: int | None = None
    error_message: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SkillTarget:
        return cls(
            id=_str(data, "id"),
            skill_id=_str(data, "skill_id"),
            tool=_str(data, "tool"),
            target_path=_str(data, "target_path"),
            mode=_str(data, "mode", "symlink"),
            status=_str(data, "status", "pending"),
            synced_at=_opt_int(data, "synced_at"),
            error_message=_opt_str(data, "error_message"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "skill_id": self.skill_id,
            "tool": self.tool,
            "target_path": self.target_path,
            "mode": self.mode,
            "status": self.status,
            "synced_at": self.synced_at,
            "error_message": self.error_message,
        }
