"""Project file handling."""

from __future__ import annotations

from crate_release.project.manifest import (
    get_manifest_version,
    read_current,
    update_manifest_version,
    write_new,
)

__all__ = [
    "get_manifest_version",
    "read_current",
    "update_manifest_version",
    "write_new",
]
