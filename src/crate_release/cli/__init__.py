"""Command line interface for crate-release."""

from __future__ import annotations

from crate_release.cli.main import app

__all__ = ["app"]
