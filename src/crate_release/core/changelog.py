"""Changelog generation from git history.

Entries are built from the raw commit messages since the last release tag
and inserted directly below the changelog heading, newest first.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date as date_type
from typing import TYPE_CHECKING, Protocol

from crate_release.exceptions import AnchorNotFoundError, ProjectError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

    from crate_release.core.version import Version

logger = logging.getLogger(__name__)

DEFAULT_HEADING = "# Changelog"
DEFAULT_DATE_FORMAT = "%m/%d/%Y"


class LogSource(Protocol):
    def get_log_messages(self, range_spec: str) -> list[str]: ...


@dataclass(frozen=True, slots=True)
class ChangelogEntry:
    """A single release section of the changelog."""

    version: str
    date: str
    lines: tuple[str, ...]

    @property
    def header(self) -> str:
        return f"### [{self.version}] - {self.date}"

    @property
    def bullets(self) -> list[str]:
        return [f"  * {line}" for line in self.lines]

    def render(self) -> str:
        return "\n".join([self.header, *self.bullets])

    def __str__(self) -> str:
        return self.render()


def collect_messages(repo: LogSource, from_ref: str, to_ref: str = "HEAD") -> Iterator[str]:
    """Yield the commit message lines after ``from_ref`` up to ``to_ref``.

    The log is retrieved once, when iteration starts.

    Args:
        repo: Repository providing ``get_log_messages``
        from_ref: Exclusive start of the range, usually the previous tag
        to_ref: Inclusive end of the range
    """
    range_spec = f"{from_ref}..{to_ref}"
    logger.debug("Collecting log messages for %s", range_spec)
    yield from repo.get_log_messages(range_spec)


def build_entry(
    version: Version | str,
    messages: Iterable[str],
    date: date_type | str,
    *,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> ChangelogEntry:
    """Build a changelog entry, dropping blank message lines.

    Args:
        version: Version the entry is for
        messages: Raw commit message lines
        date: Release date, or an already formatted date string
        date_format: strftime format used when ``date`` is a date

    Returns:
        The changelog entry
    """
    stamp = date if isinstance(date, str) else date.strftime(date_format)
    lines = tuple(line for line in messages if line.strip())
    return ChangelogEntry(version=str(version), date=stamp, lines=lines)


def _heading_pattern(heading: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(heading)}[ \t]*$", re.MULTILINE)


def splice(document: str, entry: ChangelogEntry, heading: str = DEFAULT_HEADING) -> str:
    """Insert an entry directly below the first changelog heading.

    Args:
        document: Current changelog document
        entry: Entry to insert
        heading: Heading line that anchors the insertion

    Returns:
        The updated document

    Raises:
        AnchorNotFoundError: If no line matches the heading
    """
    new_document, count = _heading_pattern(heading).subn(
        lambda _: f"{heading}\n\n{entry.render()}",
        document,
        count=1,
    )
    if count == 0:
        raise AnchorNotFoundError(
            f"Changelog heading {heading!r} not found; add it to the document "
            "so new entries can be inserted below it."
        )
    return new_document


def update_changelog(path: Path, entry: ChangelogEntry, heading: str = DEFAULT_HEADING) -> Path:
    """Splice an entry into the changelog file at ``path``.

    Raises:
        ProjectError: If the file does not exist
        AnchorNotFoundError: If the heading is missing
    """
    if not path.is_file():
        raise ProjectError(f"Changelog file not found: {path}")

    content = splice(path.read_text(), entry, heading)
    if not content.endswith("\n"):
        content += "\n"
    path.write_text(content)
    logger.info("Added changelog entry for %s to %s", entry.version, path)
    return path
