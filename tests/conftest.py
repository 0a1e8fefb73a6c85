"""Shared fixtures for crate-release tests."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from crate_release.build.cargo import CargoRunner
from crate_release.vcs.git import GitRepository

if TYPE_CHECKING:
    from pathlib import Path

CARGO_TOML = """\
[package]
name = "enforcer"
version = "1.2.3"
edition = "2021"

[dependencies]
clap = { version = "4.4", features = ["derive"] }
"""

README = """\
# enforcer

A tool.

# Changelog

### [1.2.3] - 01/02/2024
  * previous change
"""


@pytest.fixture
def cargo_project(tmp_path: Path) -> Path:
    """A project directory with Cargo.toml at 1.2.3 and a README changelog."""
    (tmp_path / "Cargo.toml").write_text(CARGO_TOML)
    (tmp_path / "README.md").write_text(README)
    return tmp_path


@pytest.fixture
def mock_repo() -> MagicMock:
    """A clean GitRepository where only tag v1.2.3 exists."""
    repo = MagicMock(spec=GitRepository)
    repo.tag_exists.side_effect = lambda name: name == "v1.2.3"
    repo.get_log_messages.return_value = ["fix bug", "", "add feature"]
    repo.is_dirty.return_value = False
    return repo


@pytest.fixture
def mock_runner() -> MagicMock:
    """A CargoRunner whose commands all succeed."""
    return MagicMock(spec=CargoRunner)
