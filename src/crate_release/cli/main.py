"""crate-release command line entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from crate_release import __version__
from crate_release.core.version import BumpType

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="crate-release",
    help="Bump versions, update the changelog, tag and package releases of a Cargo project.",
    no_args_is_help=True,
    add_completion=False,
)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"crate-release {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    path: Path | None = typer.Option(
        None,
        "-p",
        "--path",
        help="Project directory (Cargo.toml is searched from here upwards). Defaults to cwd.",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the crate-release version and exit.",
    ),
) -> None:
    """crate-release: version bumps and release archives for Cargo projects."""
    configure_logging(verbose)
    ctx.obj = path


@app.command()
def bump(
    ctx: typer.Context,
    kind: BumpType = typer.Argument(..., help="Version component to bump."),
) -> None:
    """Test, update changelog and version, commit and tag. No release build."""
    from crate_release.cli.commands.bump import run_bump

    run_bump(ctx.obj, kind, release=False, console=console, err_console=err_console)


@app.command()
def release(
    ctx: typer.Context,
    kind: BumpType | None = typer.Argument(
        None, help="Version component to bump. Prompted for when omitted."
    ),
) -> None:
    """Create and tag a new version, then build and package the release."""
    from crate_release.cli.commands.bump import run_bump

    run_bump(ctx.obj, kind, release=True, console=console, err_console=err_console)


@app.command("build-release")
def build_release(ctx: typer.Context) -> None:
    """Build and package the release archives, no version bump."""
    from crate_release.cli.commands.build import run_build_release

    run_build_release(ctx.obj, console, err_console)


@app.command()
def push(ctx: typer.Context) -> None:
    """Push the branch and the tag of the current version."""
    from crate_release.cli.commands.push import run_push

    run_push(ctx.obj, console, err_console)


@app.command()
def test(
    ctx: typer.Context,
    nocapture: bool = typer.Option(False, "--nocapture", help="Show test output."),
) -> None:
    """Run the test suite."""
    from crate_release.cli.commands.build import run_test

    run_test(ctx.obj, nocapture, console, err_console)
