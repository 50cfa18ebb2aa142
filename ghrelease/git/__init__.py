"""Local git queries used to locate the repository being released.

Usage:
    from ghrelease.git import Repository, parse_repo_slug

    repo = Repository(Path.cwd())
    if repo.is_inside_work_tree():
        print(repo.current_branch())
"""

from ghrelease.git.repository import GitError, Repository, parse_repo_slug

__all__ = [
    "GitError",
    "Repository",
    "parse_repo_slug",
]
