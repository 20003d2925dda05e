"""Bringing an onboarded skill directory into the canonical repository."""

from __future__ import annotations

import logging
from pathlib import Path

from skillmirror.core.fingerprint import fingerprint_dir
from skillmirror.exceptions import SyncIOError, TargetExistsError
from skillmirror.store.json_store import JsonSkillStore
from skillmirror.store.models import Skill, new_id, now_ms
from skillmirror.sync.fsops import copy_dir_recursive, path_exists, remove_path

logger = logging.getLogger(__name__)


def import_into_central(
    source: Path,
    name: str,
    central_root: Path,
    store: JsonSkillStore,
) -> Skill:
    """Copy ``source`` into the canonical repository and record it.

    The copy excludes ``.git``; links inside ``source`` are not followed.
    The caller saves the store.

    Args:
        source: The skill directory to import (may be a link).
        name: Skill name, used as the canonical directory name.
        central_root: Root of the canonical repository.
        store: Managed-state store to record the skill in.

    Returns:
        The new ``Skill`` record.

    Raises:
        TargetExistsError: If the canonical directory or a skill with this
            name already exists.
        SyncIOError: If the source is not a directory or the copy fails.
        FingerprintError: If the copied directory cannot be hashed.
    """
    if not source.is_dir():
        raise SyncIOError("read source", source, "not a directory")

    dest = central_root / name
    if path_exists(dest) or store.get_skill_by_name(name) is not None:
        raise TargetExistsError(dest)

    try:
        copy_dir_recursive(source, dest)
    except SyncIOError:
        remove_path(dest)
        raise

    stamp = now_ms()
    skill = Skill(
        id=new_id(),
        name=name,
        central_path=str(dest),
        source_type="local",
        source_ref=str(source),
        content_hash=fingerprint_dir(dest),
        created_at=stamp,
        updated_at=stamp,
    )
    store.add_skill(skill)
    logger.info("Imported %s into %s", source, dest)
    return skill
