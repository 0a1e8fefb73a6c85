"""crate-release: version bumps, changelogs and release archives for Cargo projects."""

from __future__ import annotations

__version__ = "0.1.0"
