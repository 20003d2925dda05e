"""Enumeration of candidate skill directories under one tool's skills root.

Every immediate subdirectory of a tool's skills directory is a candidate
skill. The scanner classifies each entry, records whether it is a link,
and drops entries that belong to the canonical repository itself.

Link Detection:
    An entry is a link when ``lstat`` reports a symlink. As a fallback,
    ``os.readlink`` succeeding also marks a link: Windows junctions are
    reported as plain directories by some metadata calls.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from skillmirror.discovery.models import DetectedSkill
from skillmirror.discovery.paths import APP_DIR_NAME
from skillmirror.discovery.tool_registry import ToolAdapter
from skillmirror.exceptions import ScanError

logger = logging.getLogger(__name__)

# Any path containing this fragment lives in the canonical repository.
CANONICAL_REPO_MARKER = f"{APP_DIR_NAME}/skills"

# Per-tool entries that are never skills.
_RESERVED_ENTRIES: dict[str, frozenset[str]] = {
    "codex": frozenset({".system"}),
}


def detect_link(path: Path) -> tuple[bool, Path | None]:
    """Report whether ``path`` is a link and where it points.

    Relative link text is anchored at the link's parent directory.

    Returns:
        ``(is_link, link_target)``; the target is None when unreadable.
    """
    try:
        is_symlink = path.is_symlink()
    except OSError:
        is_symlink = False

    try:
        raw = os.readlink(path)
    except (OSError, ValueError):
        return (is_symlink, None)

    target = Path(raw)
    if not target.is_absolute():
        target = Path(os.path.normpath(path.parent / target))
    return (True, target)


def _is_dir_entry(entry: os.DirEntry) -> bool:
    """Directories and links to directories qualify; everything else doesn't."""
    try:
        if entry.is_dir(follow_symlinks=False):
            return True
        return entry.is_symlink() and entry.is_dir(follow_symlinks=True)
    except OSError:
        return False


def contains_canonical_marker(path: Path | None) -> bool:
    """True if ``path`` points into the canonical repository by name."""
    if path is None:
        return False
    return CANONICAL_REPO_MARKER in str(path).replace("\\", "/")


def scan_tool_dir(adapter: ToolAdapter, skills_dir: Path) -> list[DetectedSkill]:
    """Find candidate skills directly under ``skills_dir``.

    Args:
        adapter: The tool the directory belongs to.
        skills_dir: Absolute path of the tool's skills directory.

    Returns:
        Detected skills in filesystem enumeration order. Empty if the
        directory does not exist.

    Raises:
        ScanError: If the directory exists but cannot be enumerated.
    """
    if not skills_dir.exists():
        return []

    reserved = _RESERVED_ENTRIES.get(adapter.key, frozenset())
    results: list[DetectedSkill] = []
    try:
        with os.scandir(skills_dir) as entries:
            for entry in entries:
                if not _is_dir_entry(entry):
                    continue
                if entry.name in reserved:
                    continue

                path = Path(entry.path)
                is_link, link_target = detect_link(path)
                if contains_canonical_marker(path) or contains_canonical_marker(link_target):
                    logger.debug("Skipping canonical repository entry %s", path)
                    continue

                results.append(DetectedSkill(
                    tool=adapter.key,
                    tool_display=adapter.display_name,
                    name=entry.name,
                    path=path,
                    is_link=is_link,
                    link_target=link_target,
                ))
    except OSError as exc:
        raise ScanError(skills_dir, exc.strerror or str(exc)) from exc
    return results
