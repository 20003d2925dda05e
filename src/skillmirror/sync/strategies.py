"""Materialization strategies, tried cheapest first.

A strategy turns a canonical source directory into a target path. The
chain for a tool is resolved once per tool and platform:

==========  ==================================================
Chain       When
==========  ==================================================
symlink,    Windows, tool may link
junction,
copy
symlink,    macOS and Linux, tool may link
copy
copy        Copy-only tools (e.g. Cursor) or ``force_copy``
==========  ==================================================

Link strategies raise ``LinkUnsupportedError`` when the host refuses the
link (missing privilege, filesystem without link support). The engine
treats that as a cue to try the next strategy. ``CopyStrategy`` errors
propagate.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import ClassVar

from skillmirror.discovery.paths import current_platform
from skillmirror.discovery.tool_registry import is_copy_only
from skillmirror.exceptions import LinkUnsupportedError
from skillmirror.sync.fsops import copy_dir_recursive
from skillmirror.sync.models import SyncMode

logger = logging.getLogger(__name__)


class SyncStrategy:
    """One way to materialize a target."""

    mode: ClassVar[SyncMode]

    def materialize(self, source: Path, target: Path) -> None:
        raise NotImplementedError


class SymlinkStrategy(SyncStrategy):
    """Native directory symlink."""

    mode = SyncMode.SYMLINK

    def materialize(self, source: Path, target: Path) -> None:
        try:
            os.symlink(source, target, target_is_directory=True)
        except (OSError, NotImplementedError) as exc:
            raise LinkUnsupportedError(self.mode.value, target, str(exc)) from exc


class JunctionStrategy(SyncStrategy):
    """Windows directory junction, which needs no symlink privilege."""

    mode = SyncMode.JUNCTION

    def materialize(self, source: Path, target: Path) -> None:
        try:
            proc = subprocess.run(
                ["cmd", "/c", "mklink", "/J", str(target), str(source)],
                capture_output=True,
                text=True,
                timeout=30,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise LinkUnsupportedError(self.mode.value, target, str(exc)) from exc
        if proc.returncode != 0:
            raise LinkUnsupportedError(
                self.mode.value, target, (proc.stderr or proc.stdout).strip(),
            )


class CopyStrategy(SyncStrategy):
    """Full recursive copy; always available."""

    mode = SyncMode.COPY

    def materialize(self, source: Path, target: Path) -> None:
        copy_dir_recursive(source, target)


SYMLINK = SymlinkStrategy()
JUNCTION = JunctionStrategy()
COPY = CopyStrategy()


def strategy_chain(
    tool_key: str | None = None,
    force_copy: bool = False,
    platform: str | None = None,
) -> tuple[SyncStrategy, ...]:
    """Resolve the ordered strategies for a tool on a platform.

    Args:
        tool_key: Target tool, matched case-insensitively against the
            copy-only table. None means no tool-specific restriction.
        force_copy: Skip linking regardless of tool.
        platform: Platform identifier; defaults to the host.

    Returns:
        Strategies in the order they must be tried.
    """
    if force_copy or (tool_key is not None and is_copy_only(tool_key)):
        return (COPY,)
    if (platform or current_platform()) == "windows":
        return (SYMLINK, JUNCTION, COPY)
    return (SYMLINK, COPY)
