"""Release orchestration.

A release runs these steps strictly in order and never goes back:

1. run the test suite
2. assert the current version was tagged
3. add a changelog entry for the next version
4. write the next version into the manifest
5. build (optional, failures are reported but not fatal)
6. commit everything and tag the next version

There is no automatic rollback. Once the commit and tag exist the result
carries the command that undoes them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from crate_release.core.changelog import (
    ChangelogEntry,
    build_entry,
    collect_messages,
    update_changelog,
)
from crate_release.exceptions import ExternalProcessError, MissingTagError
from crate_release.project.manifest import get_manifest_version, update_manifest_version

if TYPE_CHECKING:
    from pathlib import Path

    from crate_release.config.models import CrateReleaseConfig
    from crate_release.core.version import BumpType, Version

logger = logging.getLogger(__name__)


class VcsClient(Protocol):
    def get_log_messages(self, range_spec: str) -> list[str]: ...
    def tag_exists(self, name: str) -> bool: ...
    def stage_all(self) -> None: ...
    def commit(self, message: str) -> None: ...
    def create_tag(self, name: str) -> None: ...


class TaskRunner(Protocol):
    def run_tests(self) -> None: ...
    def run_build(self, *, release: bool = False, target: str | None = None) -> None: ...


class ReleaseStep(StrEnum):
    RUN_TESTS = "run-tests"
    ASSERT_PRIOR_TAG = "assert-prior-tag"
    GENERATE_CHANGELOG = "generate-changelog"
    PERSIST_VERSION = "persist-version"
    BUILD = "build"
    COMMIT_AND_TAG = "commit-and-tag"


@dataclass
class ReleaseResult:
    """What a release run did."""

    current_version: Version
    next_version: Version
    completed: list[ReleaseStep] = field(default_factory=list)
    entry: ChangelogEntry | None = None
    tag: str | None = None
    build_error: ExternalProcessError | None = None

    @property
    def undo_command(self) -> str | None:
        if self.tag is None:
            return None
        return f"git reset --hard HEAD~1 && git tag -d {self.tag}"


class ReleaseOrchestrator:
    """Sequences the steps of a version bump or release.

    Args:
        config: Release configuration
        repo: Version control collaborator
        runner: Test and build collaborator
        root: Project root; manifest and changelog paths are relative to it
    """

    def __init__(
        self,
        config: CrateReleaseConfig,
        repo: VcsClient,
        runner: TaskRunner,
        root: Path,
    ) -> None:
        self.config = config
        self.repo = repo
        self.runner = runner
        self.root = root

    @property
    def manifest_path(self) -> Path:
        return self.root / self.config.manifest_path

    @property
    def changelog_path(self) -> Path:
        return self.root / self.config.changelog_path

    def current_version(self) -> Version:
        return get_manifest_version(self.manifest_path)

    def next_version(self, bump_type: BumpType) -> Version:
        return self.current_version().bump(bump_type)

    def assert_prior_tag_exists(self, version: Version) -> str:
        """Check that ``version`` was tagged. Returns the tag name.

        Raises:
            MissingTagError: If the tag does not exist
        """
        tag = self.config.prior_tag(version)
        if not self.repo.tag_exists(tag):
            raise MissingTagError(tag)
        return tag

    def run(
        self,
        bump_type: BumpType,
        *,
        build: bool = True,
        today: date | None = None,
    ) -> ReleaseResult:
        """Run the release steps for a ``bump_type`` bump.

        Args:
            bump_type: Which version component to bump
            build: Run the build step; the bare bump path skips it
            today: Date stamped on the changelog entry

        Raises:
            ExternalProcessError: If the tests fail
            MissingTagError: If the current version was never tagged
            FormatError: If the manifest version is malformed
            VersionNotFoundError: If the manifest has no version
            AnchorNotFoundError: If the changelog has no heading
        """
        self.runner.run_tests()
        completed = [ReleaseStep.RUN_TESTS]

        current = self.current_version()
        prior_tag = self.assert_prior_tag_exists(current)
        next_version = current.bump(bump_type)
        result = ReleaseResult(current, next_version, completed)
        result.completed.append(ReleaseStep.ASSERT_PRIOR_TAG)
        logger.info("Bumping %s version: %s => %s", bump_type, current, next_version)

        messages = collect_messages(self.repo, prior_tag)
        result.entry = build_entry(
            next_version,
            messages,
            today or date.today(),
            date_format=self.config.changelog.date_format,
        )
        update_changelog(self.changelog_path, result.entry, self.config.changelog.heading)
        result.completed.append(ReleaseStep.GENERATE_CHANGELOG)

        update_manifest_version(self.manifest_path, next_version)
        result.completed.append(ReleaseStep.PERSIST_VERSION)

        if build:
            try:
                self.runner.run_build(release=False)
            except ExternalProcessError as e:
                logger.warning("Build failed, continuing with commit and tag: %s", e)
                result.build_error = e
            result.completed.append(ReleaseStep.BUILD)

        self.repo.stage_all()
        self.repo.commit(
            self.config.version.commit_message.format(current=current, next=next_version)
        )
        result.tag = self.config.new_tag(next_version)
        self.repo.create_tag(result.tag)
        result.completed.append(ReleaseStep.COMMIT_AND_TAG)
        logger.info("To undo the last commit and the tag, execute: %s", result.undo_command)
        return result
