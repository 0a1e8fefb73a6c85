"""Configuration models.

Read from the ``[package.metadata.crate-release]`` table of Cargo.toml.
Every field has a default, so an absent table yields a usable config.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Model(BaseModel):
    model_config = ConfigDict(extra="forbid")


class VersionConfig(_Model):
    """Tagging and commit settings."""

    tag_prefix: str = "v"
    """Prefix of the tag that marks the current release (checked and pushed)."""

    new_tag_prefix: str = ""
    """Prefix of the tag created for the new version."""

    commit_message: str = "[](chore): version bump from {current} => {next}"

    @field_validator("commit_message")
    @classmethod
    def _check_placeholders(cls, value: str) -> str:
        try:
            value.format(current="0.0.0", next="0.0.1")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(
                f"commit_message may only use the {{current}} and {{next}} placeholders: {e}"
            ) from e
        return value


class ChangelogConfig(_Model):
    """Changelog document settings."""

    heading: str = "# Changelog"
    date_format: str = "%m/%d/%Y"


class TargetConfig(_Model):
    """A platform the release binary is built and archived for."""

    suffix: str
    triple: str | None = None
    exe_suffix: str = ""
    output_dir: Path | None = None
    """Directory, relative to the project root, holding the built binary."""


class BuildConfig(_Model):
    """Build tool settings."""

    tool: str = "cargo"
    targets: list[TargetConfig] = Field(default_factory=list)


class CrateReleaseConfig(_Model):
    """Root configuration for crate-release."""

    executable: str | None = None
    manifest_path: Path = Path("Cargo.toml")
    changelog_path: Path = Path("README.md")
    remote: str = "origin"
    install_dir: Path | None = None

    version: VersionConfig = Field(default_factory=VersionConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)

    @property
    def effective_install_dir(self) -> Path:
        """Directory the host binary is installed into (``~/bin`` by default)."""
        if self.install_dir is None:
            return Path.home() / "bin"
        return self.install_dir.expanduser()

    def prior_tag(self, version: object) -> str:
        """Name of the tag marking the release of ``version``."""
        return f"{self.version.tag_prefix}{version}"

    def new_tag(self, version: object) -> str:
        """Name of the tag created when releasing ``version``."""
        return f"{self.version.new_tag_prefix}{version}"
