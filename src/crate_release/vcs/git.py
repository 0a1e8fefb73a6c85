"""Git repository access.

Every operation shells out to the ``git`` executable and blocks until it
finishes.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from crate_release.exceptions import GitError

logger = logging.getLogger(__name__)


class GitRepository:
    """A git working tree rooted at ``path``."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).resolve()
        try:
            inside = self._run("rev-parse", "--is-inside-work-tree")
        except GitError as e:
            raise GitError(f"Not a git repository: {self.path}", stderr=e.stderr) from e
        if inside.strip() != "true":
            raise GitError(f"Not a git work tree: {self.path}")

    def _run(self, *args: str) -> str:
        command = ["git", *args]
        logger.debug("Running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git not found on PATH", command=command) from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"`{' '.join(command)}` failed with exit code {e.returncode}",
                command=command,
                returncode=e.returncode,
                stderr=e.stderr,
            ) from e
        return result.stdout

    def get_log_messages(self, range_spec: str) -> list[str]:
        """Return the full message lines of every commit in ``range_spec``."""
        return self._run("log", "--format=%B", range_spec).strip().splitlines()

    def tag_exists(self, name: str) -> bool:
        return bool(self._run("tag", "-l", name).strip())

    def is_dirty(self) -> bool:
        return bool(self._run("status", "--porcelain").strip())

    def stage_all(self) -> None:
        self._run("add", ".")

    def commit(self, message: str) -> None:
        self._run("commit", "-m", message)
        logger.info("Committed: %s", message)

    def create_tag(self, name: str) -> None:
        self._run("tag", name)
        logger.info("Created tag %s", name)

    def push(self, remote: str = "origin") -> None:
        self._run("push", remote)

    def push_tag(self, remote: str, tag: str) -> None:
        self._run("push", remote, tag)
