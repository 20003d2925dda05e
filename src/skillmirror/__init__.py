"""skillmirror: Discover agent skills across AI tools and sync them from one canonical repository."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
