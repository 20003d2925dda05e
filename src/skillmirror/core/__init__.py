"""Content-level primitives shared by discovery and sync."""

from skillmirror.core.fingerprint import fingerprint_dir, try_fingerprint

__all__ = ["fingerprint_dir", "try_fingerprint"]
