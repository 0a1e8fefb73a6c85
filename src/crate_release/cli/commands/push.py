"""Implementation of the 'push' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from crate_release.cli.context import load_project
from crate_release.exceptions import CrateReleaseError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console


def run_push(path: Path | None, console: Console, err_console: Console) -> None:
    """Push the current branch and the tag of the current version."""
    project = load_project(path, err_console)
    remote = project.config.remote

    try:
        repo = project.repo()
        tag = project.config.prior_tag(project.current_version())
        repo.push(remote)
        repo.push_tag(remote, tag)
    except CrateReleaseError as e:
        err_console.print(f"[red]Error pushing:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(f"  [green]✓[/] Pushed to {remote} with tag [cyan]{tag}[/]")
