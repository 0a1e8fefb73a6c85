"""Implementation of the 'bump' and 'release' commands.

Both commands test, update the changelog and manifest, commit and tag.
'release' additionally builds and packages the release archives.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt

from crate_release.cli.context import load_project
from crate_release.core.version import BumpType
from crate_release.exceptions import CrateReleaseError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from crate_release.core.release import ReleaseResult

ABORT = "abort"


def choose_bump_type(console: Console, default: BumpType = BumpType.MINOR) -> BumpType | None:
    """Ask which component to bump. Returns None if the user aborts."""
    choice = Prompt.ask(
        f"this will create and tag a new version (default: {default})",
        choices=[BumpType.MINOR.value, BumpType.MAJOR.value, BumpType.PATCH.value, ABORT],
        default=str(default),
        console=console,
    )
    if choice == ABORT:
        return None
    return BumpType.parse(choice)


def run_bump(
    path: Path | None,
    bump_type: BumpType | None,
    *,
    release: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the bump or release command.

    Args:
        path: Optional path to project directory
        bump_type: Component to bump; prompted for when None
        release: Build and package release archives after tagging
        console: Console for standard output
        err_console: Console for error output
    """
    project = load_project(path, err_console)

    if bump_type is None:
        bump_type = choose_bump_type(console)
        if bump_type is None:
            console.print("ok...maybe later")
            return

    try:
        if project.repo().is_dirty():
            err_console.print(
                "[yellow]Warning:[/] uncommitted changes will be included in the "
                "version bump commit."
            )
        current = project.current_version()
        console.print(
            f"Creating {bump_type} version: [cyan]{current}[/] => "
            f"[green]{current.bump(bump_type)}[/]"
        )
        result = project.orchestrator().run(bump_type, build=release)
    except CrateReleaseError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    _print_result(result, console, err_console)

    if release:
        try:
            archives = project.packager(host_only=True).package(result.next_version)
        except CrateReleaseError as e:
            err_console.print(f"[red]Error packaging release:[/] {escape(str(e))}")
            raise SystemExit(1) from e
        for archive in archives:
            console.print(f"  [green]✓[/] Packaged {archive}")


def _print_result(result: ReleaseResult, console: Console, err_console: Console) -> None:
    if result.entry is not None:
        console.print(f"  [green]✓[/] Changelog entry:\n[dim]{escape(str(result.entry))}[/]")
    console.print(f"  [green]✓[/] Version {result.current_version} => {result.next_version}")
    if result.build_error is not None:
        err_console.print(f"[yellow]Warning:[/] build failed: {escape(str(result.build_error))}")
    console.print(
        Panel(
            f"[green]Tagged {result.tag}[/]\n\n"
            "To undo the last commit and the tag, execute:\n"
            f"  [cyan]{result.undo_command}[/]",
            title="[green]Version Bump Complete[/]",
            border_style="green",
        )
    )
