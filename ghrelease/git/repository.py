"""Local git repository.

Read-only queries against the working copy the release is drafted from.
All operations that can fail return Result types.

Usage:
    repo = Repository(Path.cwd())

    match repo.remote_url():
        case Ok(url):
            print(parse_repo_slug(url))
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from ghrelease.core.result import Err, Ok, Result
from ghrelease.platform.process import ProcessError
from ghrelease.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

# owner/name as the last two segments of an ssh (host:owner/name) or
# https (host/owner/name) remote URL, with an optional .git suffix.
_SLUG_RE = re.compile(r"[:/]([\w.-]+)/([\w.-]+?)(?:\.git)?/?$")

__all__ = [
    "GitError",
    "Repository",
    "parse_repo_slug",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """A failed git query. ``message`` is git's stderr when it printed one."""

    command: str
    message: str
    returncode: int = 1


def parse_repo_slug(url: str) -> tuple[str, str] | None:
    """Extract (owner, name) from a remote URL.

    Returns None when the URL does not end in two path segments.
    """
    m = _SLUG_RE.search(url.strip())
    if m is None:
        return None
    owner, name = m.group(1), m.group(2)
    if not owner or not name:
        return None
    return (owner, name)


class Repository:
    """Git working copy queries.

    Attributes:
        path: Directory the git commands run from (any path inside the repo)
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def is_inside_work_tree(self) -> bool:
        result = self._run(["rev-parse", "--is-inside-work-tree"])
        match result:
            case Ok(stdout):
                return stdout.strip() == "true"
            case Err(_):
                return False

    def git_dir(self) -> Result[Path, GitError]:
        """Absolute path of the git metadata directory (usually <root>/.git)."""
        result = self._run(["rev-parse", "--git-dir"])
        match result:
            case Err(e):
                return Err(self._error("rev-parse --git-dir", e, "not a git repo"))
            case Ok(stdout):
                git_dir = Path(stdout.strip())
                if not git_dir.is_absolute():
                    git_dir = self.path / git_dir
                return Ok(git_dir)

    def current_branch(self) -> str | None:
        """Get current branch name.

        Returns None if detached HEAD or error.
        """
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        match result:
            case Ok(stdout):
                branch = stdout.strip()
                return None if branch in {"", "HEAD"} else branch
            case Err(_):
                return None

    def remote_url(self, name: str = "origin") -> Result[str, GitError]:
        result = self._run(["remote", "get-url", name])
        match result:
            case Err(e):
                return Err(self._error("remote get-url", e, f"no such remote: {name}"))
            case Ok(stdout):
                url = stdout.strip()
                if not url:
                    return Err(GitError(command="remote get-url", message=f"empty url: {name}"))
                return Ok(url)

    def _error(self, command: str, e: ProcessError, fallback: str) -> GitError:
        return GitError(
            command=command,
            message=e.stderr.strip() or fallback,
            returncode=e.returncode,
        )

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )
