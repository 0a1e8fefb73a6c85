"""Version control integration."""

from __future__ import annotations

from crate_release.vcs.git import GitRepository

__all__ = ["GitRepository"]
