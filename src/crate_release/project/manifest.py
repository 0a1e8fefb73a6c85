"""Cargo.toml version manipulation.

This module reads and rewrites the ``version = "X.Y.Z"`` declaration of a
manifest. It preserves formatting and comments by using regex-based
replacement rather than full TOML parsing and rewriting.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from crate_release.core.version import Version
from crate_release.exceptions import FormatError, ProjectError, VersionNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# Only declarations at the start of a line count; inline tables such as
# `serde = { version = "1" }` are ignored.
VERSION_PATTERN = re.compile(
    r'^(?P<key>version\s*=\s*)"(?P<value>[^"\n]*)"',
    re.MULTILINE | re.IGNORECASE,
)


def read_current(document: str) -> str:
    """Return the value of the first version declaration.

    Raises:
        VersionNotFoundError: If no line declares a version
    """
    match = VERSION_PATTERN.search(document)
    if match is None:
        raise VersionNotFoundError('No `version = "X.Y.Z"` declaration found in manifest')
    return match.group("value")


def write_new(document: str, new_version: Version | str) -> str:
    """Replace the first version declaration with ``new_version``.

    All other lines are passed through unchanged.

    Raises:
        VersionNotFoundError: If no line declares a version
        FormatError: If the existing value is not a ``major.minor.patch`` version
    """
    match = VERSION_PATTERN.search(document)
    if match is None:
        raise VersionNotFoundError('No `version = "X.Y.Z"` declaration found in manifest')

    try:
        Version.parse(match.group("value"))
    except FormatError as e:
        raise FormatError(
            f"Refusing to overwrite malformed manifest version {match.group('value')!r}: {e}"
        ) from e

    replacement = f'{match.group("key")}"{new_version}"'
    return document[: match.start()] + replacement + document[match.end() :]


def get_manifest_version(path: Path) -> Version:
    """Read the current version from a manifest file.

    Raises:
        ProjectError: If the file does not exist
        VersionNotFoundError: If the version cannot be found
        FormatError: If the version is malformed
    """
    if not path.is_file():
        raise ProjectError(f"Manifest file not found: {path}")

    raw = read_current(path.read_text())
    logger.debug("Version in %s is %s", path, raw)
    return Version.parse(raw)


def update_manifest_version(path: Path, new_version: Version | str) -> Path:
    """Write ``new_version`` into the manifest file.

    Raises:
        ProjectError: If the file does not exist
        VersionNotFoundError: If the version cannot be found
        FormatError: If the existing version is malformed
    """
    if not path.is_file():
        raise ProjectError(f"Manifest file not found: {path}")

    path.write_text(write_new(path.read_text(), new_version))
    logger.info("Updated version in %s to %s", path, new_version)
    return path
