"""Project discovery shared by the CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from crate_release.build import CargoRunner, ReleasePackager, default_targets
from crate_release.config import CrateReleaseConfig, find_cargo_toml, load_config
from crate_release.core.release import ReleaseOrchestrator
from crate_release.exceptions import CrateReleaseError
from crate_release.project.manifest import get_manifest_version
from crate_release.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from crate_release.core.version import Version


@dataclass
class ProjectContext:
    root: Path
    config: CrateReleaseConfig

    def runner(self) -> CargoRunner:
        return CargoRunner(self.root, tool=self.config.build.tool)

    def repo(self) -> GitRepository:
        return GitRepository(self.root)

    def current_version(self) -> Version:
        return get_manifest_version(self.root / self.config.manifest_path)

    def orchestrator(self) -> ReleaseOrchestrator:
        return ReleaseOrchestrator(self.config, self.repo(), self.runner(), self.root)

    def packager(self, *, host_only: bool = False) -> ReleasePackager:
        """Packager for the configured targets, or only the host target."""
        targets = self.config.build.targets or default_targets()
        if host_only:
            targets = [target for target in targets if target.triple is None] or targets[:1]
        return ReleasePackager(
            self.root,
            self.config.executable or self.root.name,
            self.runner(),
            targets=targets,
            install_dir=self.config.effective_install_dir,
        )


def load_project(path: Path | None, err_console: Console) -> ProjectContext:
    """Locate the project and load its configuration, exiting on failure."""
    project_path = path or Path.cwd()
    try:
        root = find_cargo_toml(project_path).parent
        config = load_config(root)
    except CrateReleaseError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e
    return ProjectContext(root=root, config=config)
