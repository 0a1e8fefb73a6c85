"""Implementation of the 'build-release' and 'test' commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from crate_release.cli.context import load_project
from crate_release.exceptions import CrateReleaseError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_build_release(path: Path | None, console: Console, err_console: Console) -> None:
    """Build and package the current version without bumping it."""
    project = load_project(path, err_console)

    try:
        version = project.current_version()
        archives = project.packager().package(version)
    except CrateReleaseError as e:
        err_console.print(f"[red]Error building release:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    for archive in archives:
        console.print(f"  [green]✓[/] Packaged {archive}")


def run_test(path: Path | None, nocapture: bool, console: Console, err_console: Console) -> None:
    """Run the project's test suite."""
    project = load_project(path, err_console)

    try:
        project.runner().run_tests(nocapture=nocapture)
    except CrateReleaseError as e:
        err_console.print(f"[red]Tests failed:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print("  [green]✓[/] Tests passed")
