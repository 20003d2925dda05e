"""Hybrid sync engine: make a target path present a canonical skill.

Each call reconciles one target against one source:

- Target absent: create it with the first strategy that works
  (symlink, then junction on Windows, then copy).
- Target is already a link to exactly this source: no-op, reported with
  the link's mode and ``replaced=False``.
- Target is anything else: fail with ``TargetExistsError`` unless
  ``overwrite`` is set, in which case the target is removed first and the
  outcome reports ``replaced=True``.

The existence check and the creation are separate filesystem calls; two
writers racing on the same target are not supported.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from skillmirror.exceptions import LinkUnsupportedError, SyncIOError, TargetExistsError
from skillmirror.sync.fsops import (
    ensure_parent_dir,
    existing_link_mode,
    is_same_link,
    path_exists,
    remove_path,
)
from skillmirror.sync.models import SyncOutcome
from skillmirror.sync.strategies import COPY, SyncStrategy, strategy_chain

logger = logging.getLogger(__name__)

__all__ = [
    "remove_path",
    "sync_dir_copy_with_overwrite",
    "sync_dir_for_tool_with_overwrite",
    "sync_dir_hybrid",
    "sync_dir_hybrid_with_overwrite",
]


def _require_source(source: Path) -> None:
    if not source.is_dir():
        raise SyncIOError("read source", source, "not a directory")


def _create(
    source: Path, target: Path, chain: Sequence[SyncStrategy], replaced: bool,
) -> SyncOutcome:
    """Try each strategy in order; the first success wins.

    A strategy failing with ``SyncIOError`` leaves nothing at ``target``.
    """
    ensure_parent_dir(target)
    for strategy in chain:
        try:
            strategy.materialize(source, target)
        except LinkUnsupportedError as exc:
            logger.debug("Falling back from %s: %s", strategy.mode.value, exc)
            continue
        except SyncIOError:
            remove_path(target)
            raise
        logger.info("Synced %s -> %s (%s)", source, target, strategy.mode.value)
        return SyncOutcome(mode_used=strategy.mode, target_path=target, replaced=replaced)
    # Only reachable for a chain without a copy fallback.
    raise SyncIOError("materialize", target, "no strategy succeeded", source, target)


def _clear_existing(target: Path, overwrite: bool) -> bool:
    """Apply the exists/overwrite policy. Returns True if a target was removed."""
    if not path_exists(target):
        return False
    if not overwrite:
        raise TargetExistsError(target)
    logger.info("Replacing existing target %s", target)
    remove_path(target)
    return True


def _sync(
    source: Path, target: Path, overwrite: bool, chain: Sequence[SyncStrategy],
) -> SyncOutcome:
    _require_source(source)
    if path_exists(target) and is_same_link(target, source):
        return SyncOutcome(
            mode_used=existing_link_mode(target), target_path=target, replaced=False,
        )
    replaced = _clear_existing(target, overwrite)
    return _create(source, target, chain, replaced)


def sync_dir_hybrid(source: Path, target: Path) -> SyncOutcome:
    """Sync without overwriting: link if possible, copy otherwise.

    Raises:
        TargetExistsError: If ``target`` exists and is not a link to ``source``.
        SyncIOError: If the source is missing or the copy fails.
    """
    return _sync(source, target, False, strategy_chain())


def sync_dir_hybrid_with_overwrite(
    source: Path, target: Path, overwrite: bool,
) -> SyncOutcome:
    """Sync, replacing a foreign target when ``overwrite`` is set.

    Raises:
        TargetExistsError: If ``target`` exists, is not a link to
            ``source``, and ``overwrite`` is False.
        SyncIOError: If removal, creation or copy fails.
    """
    return _sync(source, target, overwrite, strategy_chain())


def sync_dir_copy_with_overwrite(
    source: Path, target: Path, overwrite: bool,
) -> SyncOutcome:
    """Sync by copying only; never creates a link.

    An existing target is handled by the same exists/overwrite policy,
    including an existing link to ``source``: a copy-only target must not
    remain a link.

    Raises:
        TargetExistsError: If ``target`` exists and ``overwrite`` is False.
        SyncIOError: If removal or copy fails.
    """
    _require_source(source)
    replaced = _clear_existing(target, overwrite)
    return _create(source, target, (COPY,), replaced)


def sync_dir_for_tool_with_overwrite(
    tool_key: str,
    source: Path,
    target: Path,
    overwrite: bool,
    force_copy: bool = False,
) -> SyncOutcome:
    """Sync a target for a specific tool.

    Tools that cannot follow links (matched case-insensitively) and
    adapters flagged ``force_copy`` go straight to copy-only mode.
    """
    chain = strategy_chain(tool_key, force_copy=force_copy)
    if chain == (COPY,):
        return sync_dir_copy_with_overwrite(source, target, overwrite)
    return _sync(source, target, overwrite, chain)

