"""Core business logic for crate-release.

This module contains the fundamental building blocks:
- Version parsing, comparison and bumping
- Changelog entries built from git history
- Release orchestration
"""

from __future__ import annotations

from crate_release.core.changelog import (
    ChangelogEntry,
    build_entry,
    collect_messages,
    splice,
    update_changelog,
)
from crate_release.core.release import ReleaseOrchestrator, ReleaseResult, ReleaseStep
from crate_release.core.version import BumpType, Version, compare_versions, parse_version

__all__ = [
    # Version
    "BumpType",
    # Changelog
    "ChangelogEntry",
    # Release
    "ReleaseOrchestrator",
    "ReleaseResult",
    "ReleaseStep",
    "Version",
    "build_entry",
    "collect_messages",
    "compare_versions",
    "parse_version",
    "splice",
    "update_changelog",
]
