"""Fetch-or-empty reads of the managed state.

Onboarding must still work when the store is unavailable: each accessor
degrades to an empty set and logs a warning, so grouping code can treat
its inputs as total.
"""

from __future__ import annotations

import logging
from pathlib import Path

from skillmirror.discovery.models import FilterContext
from skillmirror.discovery.onboarding import managed_target_key
from skillmirror.exceptions import SkillMirrorError
from skillmirror.store.json_store import SkillStore

logger = logging.getLogger(__name__)


def managed_target_keys_or_empty(store: SkillStore | None) -> frozenset[str]:
    """Keys of every persisted target, or an empty set on failure."""
    if store is None:
        return frozenset()
    try:
        pairs = store.list_managed_target_paths()
    except (SkillMirrorError, OSError) as exc:
        logger.warning("Managed targets unavailable, not excluding any: %s", exc)
        return frozenset()
    return frozenset(managed_target_key(tool, path) for tool, path in pairs)


def managed_names_or_empty(store: SkillStore | None) -> frozenset[str]:
    """Names of every managed skill, or an empty set on failure."""
    if store is None:
        return frozenset()
    try:
        return frozenset(store.list_managed_skill_names())
    except (SkillMirrorError, OSError) as exc:
        logger.warning("Managed skill names unavailable, not excluding any: %s", exc)
        return frozenset()


def build_filter_context(
    store: SkillStore | None, exclude_root: Path | None,
) -> FilterContext:
    """Build the scan exclusion policy from the current managed state."""
    return FilterContext(
        exclude_root=exclude_root,
        managed_targets=managed_target_keys_or_empty(store),
        managed_names=managed_names_or_empty(store),
    )
