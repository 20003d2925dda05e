"""Content fingerprints for skill directories.

A fingerprint is a SHA-256 digest over a directory tree, rendered in the
integrity format ``sha256:<64-hex-chars>``. Two directories share a
fingerprint exactly when they hold the same files at the same relative
paths with the same bytes.

Hashing rules:

- The root may itself be a symlink or junction; it is followed.
- Links inside the tree contribute nothing, and any entry named ``.git``
  (directory or gitdir file) is skipped at any depth. These are the
  exclusions of the sync engine's recursive copy, so a copied target
  hashes like its source.
- Entries are fed in sorted relative-path order. Enumeration order never
  changes the result.
- Empty directories contribute nothing.
"""

from __future__ import annotations

import hashlib
import logging
import os
import re
from pathlib import Path

from skillmirror.exceptions import FingerprintError

logger = logging.getLogger(__name__)

FINGERPRINT_RE = re.compile(r"^sha256:[0-9a-f]{64}$")

# Entries never hashed, at any depth; mirrors the recursive copy.
SKIPPED_NAMES: frozenset[str] = frozenset({".git"})

_CHUNK_SIZE = 64 * 1024


def _file_digest(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _collect_entries(root: Path) -> list[tuple[str, Path]]:
    """List ``(relative_posix_path, absolute_path)`` for every regular file."""
    entries: list[tuple[str, Path]] = []
    pending = [root]
    while pending:
        current = pending.pop()
        with os.scandir(current) as it:
            for entry in it:
                if entry.name in SKIPPED_NAMES:
                    continue
                if entry.is_symlink() or entry.is_junction():
                    continue
                path = Path(entry.path)
                if entry.is_dir(follow_symlinks=False):
                    pending.append(path)
                elif entry.is_file(follow_symlinks=False):
                    entries.append((path.relative_to(root).as_posix(), path))
    entries.sort(key=lambda e: e[0])
    return entries


def fingerprint_dir(path: Path) -> str:
    """Compute the content fingerprint of a directory.

    Args:
        path: Directory to hash. May be a link to a directory.

    Returns:
        Fingerprint string in "sha256:<64-hex-chars>" format.

    Raises:
        FingerprintError: If the path is not a directory or any entry
            cannot be read.
    """
    if not path.is_dir():
        raise FingerprintError(path, "not a directory")

    outer = hashlib.sha256()
    try:
        for rel, entry_path in _collect_entries(path):
            payload = _file_digest(entry_path)
            outer.update(f"file\0{rel}\0{payload}\n".encode("utf-8", "surrogateescape"))
    except OSError as exc:
        raise FingerprintError(path, exc.strerror or str(exc)) from exc
    return f"sha256:{outer.hexdigest()}"


def try_fingerprint(path: Path) -> str | None:
    """Fingerprint a directory, returning None instead of raising.

    Used where a missing fingerprint is an acceptable outcome, such as a
    skill deleted between scanning and hashing.
    """
    try:
        return fingerprint_dir(path)
    except FingerprintError as exc:
        logger.warning("%s", exc)
        return None
