"""skillmirror exception hierarchy.

All public exceptions inherit from SkillMirrorError, giving callers a single
base class to catch when they want to handle any skillmirror-specific failure
without swallowing unrelated errors.
"""

from __future__ import annotations

from pathlib import Path


class SkillMirrorError(Exception):
    """Base exception for all skillmirror errors."""


class ConfigError(SkillMirrorError):
    """Raised when the configuration file is malformed.

    Covers invalid YAML, wrong value types, and custom tool entries
    missing required keys.
    """


class ScanError(SkillMirrorError):
    """Raised when a tool's skills directory cannot be enumerated.

    Covers permission errors and races against deletion. The onboarding
    planner isolates these per source.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read skills directory {path}: {reason}")


class FingerprintError(SkillMirrorError):
    """Raised when a directory's content hash cannot be computed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot fingerprint {path}: {reason}")


class StoreError(SkillMirrorError):
    """Raised when the managed-skill state file cannot be read or written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"skill store {path}: {reason}")


class SyncError(SkillMirrorError):
    """Base class for failures while materializing a sync target."""


class TargetExistsError(SyncError):
    """Raised when a sync target exists and overwrite was not requested.

    This is a recoverable condition: the caller decides whether to retry
    with overwrite enabled.
    """

    def __init__(self, target: Path) -> None:
        self.target = target
        super().__init__(f"target already exists: {target}")


class SyncIOError(SyncError):
    """Raised when a create, copy, or remove step fails during a sync.

    Attributes:
        operation: Short name of the failed step (e.g. "copy file").
        path: The path the failing call operated on.
        source: Source path of the sync, when known.
        destination: Destination path of the sync, when known.
    """

    def __init__(
        self,
        operation: str,
        path: Path,
        reason: str,
        source: Path | None = None,
        destination: Path | None = None,
    ) -> None:
        self.operation = operation
        self.path = path
        self.reason = reason
        self.source = source
        self.destination = destination
        detail = f"{operation} {path}: {reason}"
        if source is not None and destination is not None:
            detail += f" (syncing {source} -> {destination})"
        super().__init__(detail)


class LinkUnsupportedError(SyncError):
    """Raised by a link strategy when the platform refuses the link.

    The hybrid engine treats this as a signal to try the next strategy;
    it only reaches callers who invoke a link strategy directly.
    """

    def __init__(self, mode: str, target: Path, reason: str) -> None:
        self.mode = mode
        self.target = target
        self.reason = reason
        super().__init__(f"{mode} not available for {target}: {reason}")
