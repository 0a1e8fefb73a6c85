"""Semantic version model.

Versions are immutable ``major.minor.patch`` triples. Bumping returns a new
value; the original is never modified.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from crate_release.exceptions import FormatError

_COMPONENT = re.compile(r"[0-9]+")


class BumpType(StrEnum):
    """Which component of a version to increment."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @classmethod
    def parse(cls, value: str) -> BumpType:
        """Look up a bump type by name, ignoring case.

        Raises:
            FormatError: If the name is not patch, minor or major
        """
        try:
            return cls(value.strip().lower())
        except ValueError as e:
            choices = ", ".join(member.value for member in cls)
            raise FormatError(f"Unknown bump kind {value!r}, expected one of: {choices}") from e


@dataclass(frozen=True, order=True, slots=True)
class Version:
    """A ``major.minor.patch`` version.

    Field order defines the ordering: major, then minor, then patch.
    """

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise FormatError(f"Version {name} must be a non-negative integer, got {value!r}")

    @classmethod
    def parse(cls, version_str: str) -> Version:
        """Parse a dotted version string such as ``"1.2.3"``.

        Args:
            version_str: Version string with exactly three numeric components

        Returns:
            Parsed Version

        Raises:
            FormatError: If the string is not a valid version
        """
        parts = version_str.strip().split(".")
        if len(parts) != 3:
            raise FormatError(
                f"Invalid version {version_str!r}: expected major.minor.patch, "
                f"got {len(parts)} component(s)"
            )
        for part in parts:
            if not _COMPONENT.fullmatch(part):
                raise FormatError(f"Invalid version {version_str!r}: {part!r} is not numeric")
        major, minor, patch = (int(part) for part in parts)
        return cls(major, minor, patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def version_code(self) -> int:
        """Single integer encoding of the version (``1.2.3`` -> ``1002003``)."""
        return self.major * 1000 * 1000 + self.minor * 1000 + self.patch

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1 as this version is lower, equal or higher."""
        return compare_versions(self, other)

    def bump(self, bump_type: BumpType) -> Version:
        """Return the next version for the given bump type."""
        if bump_type == BumpType.MAJOR:
            return self.bump_major()
        if bump_type == BumpType.MINOR:
            return self.bump_minor()
        if bump_type == BumpType.PATCH:
            return self.bump_patch()
        raise FormatError(f"Unknown bump kind {bump_type!r}")

    def bump_major(self) -> Version:
        return Version(self.major + 1, 0, 0)

    def bump_minor(self) -> Version:
        return Version(self.major, self.minor + 1, 0)

    def bump_patch(self) -> Version:
        return Version(self.major, self.minor, self.patch + 1)


def parse_version(version_str: str) -> Version:
    """Parse a version string. Convenience wrapper for Version.parse()."""
    return Version.parse(version_str)


def compare_versions(a: Version, b: Version) -> int:
    """Compare two versions component by component.

    The first differing component decides.

    Returns:
        -1 if ``a < b``, 0 if equal, 1 if ``a > b``
    """
    for left, right in zip(
        (a.major, a.minor, a.patch), (b.major, b.minor, b.patch), strict=True
    ):
        if left != right:
            return -1 if left < right else 1
    return 0
