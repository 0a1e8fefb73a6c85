"""Configuration management for crate-release."""

from __future__ import annotations

from crate_release.config.loader import find_cargo_toml, load_config
from crate_release.config.models import (
    BuildConfig,
    ChangelogConfig,
    CrateReleaseConfig,
    TargetConfig,
    VersionConfig,
)

__all__ = [
    "BuildConfig",
    "ChangelogConfig",
    "CrateReleaseConfig",
    "TargetConfig",
    "VersionConfig",
    "find_cargo_toml",
    "load_config",
]
