"""Exception hierarchy for crate-release.

All errors raised by crate-release derive from CrateReleaseError so the
CLI can report them uniformly and exit non-zero.
"""

from __future__ import annotations


class CrateReleaseError(Exception):
    """Base class for all crate-release errors."""


class FormatError(CrateReleaseError):
    """A version string or bump kind is malformed."""


# Configuration


class ConfigError(CrateReleaseError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No Cargo.toml was found."""


class ConfigValidationError(ConfigError):
    """The [package.metadata.crate-release] table is invalid."""


# Project files


class ProjectError(CrateReleaseError):
    """A project file is missing or cannot be updated."""


class VersionNotFoundError(ProjectError):
    """The manifest has no version declaration."""


class AnchorNotFoundError(ProjectError):
    """The changelog document has no heading to insert entries under."""


# Release invariants


class MissingTagError(CrateReleaseError):
    """The current version was never tagged."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(
            f"tag {tag} missing: the current version has not been released. "
            f"Create it with: git tag {tag}"
        )


# External processes


class ExternalProcessError(CrateReleaseError):
    """An external command (test, build, git) failed."""

    def __init__(
        self,
        message: str,
        *,
        command: list[str] | None = None,
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.stderr:
            return f"{message}\n{self.stderr.strip()}"
        return message


class GitError(ExternalProcessError):
    """A git command failed."""
