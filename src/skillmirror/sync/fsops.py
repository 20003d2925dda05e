"""Filesystem primitives used by the hybrid sync engine.

Every mutating helper wraps ``OSError`` in ``SyncIOError`` carrying the
path that failed, so a failed sync can be diagnosed from the message.

Removal Safety:
    ``remove_path`` classifies a path by its own ``lstat`` metadata. A
    symlink or junction to a directory is unlinked, never recursed into:
    recursing would delete the canonical skill it points at.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path

from skillmirror.exceptions import SyncIOError
from skillmirror.sync.models import SyncMode

logger = logging.getLogger(__name__)

# Never copied into a target, at any depth.
COPY_EXCLUDED_NAMES: frozenset[str] = frozenset({".git"})


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


def path_exists(path: Path) -> bool:
    """True if anything exists at ``path``, including a dangling link."""
    return os.path.lexists(path)


def is_link_like(path: Path) -> bool:
    """True for symlinks and Windows junctions."""
    return path.is_symlink() or path.is_junction()


def _strip_extended_prefix(raw: str) -> str:
    # Windows reports junction targets with the extended-length prefix.
    for prefix in ("\\\\?\\", "\\??\\"):
        if raw.startswith(prefix):
            return raw[len(prefix):]
    return raw


def read_link_target(path: Path) -> Path | None:
    """Return the link text of ``path``, or None if it is not a link."""
    try:
        return Path(_strip_extended_prefix(os.readlink(path)))
    except (OSError, ValueError):
        return None


def is_same_link(link_path: Path, source: Path) -> bool:
    """True if ``link_path`` is a link whose target is exactly ``source``."""
    target = read_link_target(link_path)
    return target is not None and target == source


def existing_link_mode(path: Path) -> SyncMode:
    """Classify an existing link as a junction or a symlink."""
    return SyncMode.JUNCTION if path.is_junction() else SyncMode.SYMLINK


def ensure_parent_dir(path: Path) -> None:
    """Create the parent directory of ``path`` if needed."""
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SyncIOError("create dir", parent, _reason(exc)) from exc


def remove_path(path: Path) -> None:
    """Remove a file, directory tree, symlink or junction.

    Succeeds silently when nothing exists at ``path``.

    Raises:
        SyncIOError: If the path exists but cannot be removed.
    """
    try:
        st = os.lstat(path)
    except FileNotFoundError:
        return
    except OSError as exc:
        raise SyncIOError("stat", path, _reason(exc)) from exc

    try:
        if is_link_like(path):
            # Junctions are directory entries on Windows and need rmdir.
            if path.is_junction():
                os.rmdir(path)
            else:
                os.unlink(path)
            logger.debug("Removed link %s", path)
        elif stat.S_ISDIR(st.st_mode):
            shutil.rmtree(path)
            logger.debug("Removed directory %s", path)
        else:
            os.unlink(path)
            logger.debug("Removed file %s", path)
    except OSError as exc:
        raise SyncIOError("remove", path, _reason(exc)) from exc


def _raise_walk_error(exc: OSError) -> None:
    raise exc


def copy_dir_recursive(source: Path, target: Path) -> None:
    """Copy a skill directory tree into ``target``.

    Links found inside ``source`` are skipped, not followed. ``.git`` is
    excluded at any depth. Directories are created before the files they
    hold.

    Raises:
        SyncIOError: On the first entry that fails, naming source and
            destination paths.
    """
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SyncIOError("create dir", target, _reason(exc), source, target) from exc

    try:
        _copy_tree(source, target)
    except OSError as exc:
        failed = Path(exc.filename) if exc.filename else source
        raise SyncIOError("read dir", failed, _reason(exc), source, target) from exc


def _copy_tree(source: Path, target: Path) -> None:
    walker = os.walk(source, followlinks=False, onerror=_raise_walk_error)
    for dirpath, dirnames, filenames in walker:
        current = Path(dirpath)
        dest_dir = target / current.relative_to(source)

        kept_dirs: list[str] = []
        for name in dirnames:
            child = current / name
            if name in COPY_EXCLUDED_NAMES or is_link_like(child):
                continue
            try:
                (dest_dir / name).mkdir(exist_ok=True)
            except OSError as exc:
                raise SyncIOError(
                    "create dir", dest_dir / name, _reason(exc), source, target,
                ) from exc
            kept_dirs.append(name)
        dirnames[:] = kept_dirs

        for name in filenames:
            src_file = current / name
            if name in COPY_EXCLUDED_NAMES or src_file.is_symlink():
                continue
            dst_file = dest_dir / name
            try:
                shutil.copy2(src_file, dst_file)
            except OSError as exc:
                raise SyncIOError(
                    "copy file", src_file, f"to {dst_file}: {_reason(exc)}", source, target,
                ) from exc
