from __future__ import annotations

from ghrelease.core.result import Err, Ok, Result
from ghrelease.release.errors import ReleaseError
from ghrelease.release.gh import RemoteService
from ghrelease.release.model import Commit


def compare(
    remote: RemoteService,
    *,
    base: Commit,
    head: Commit,
) -> Result[list[Commit], ReleaseError]:
    """Commits on head that are not on base, in the service's order (oldest first).

    Anything but a strict "ahead" relationship (identical, behind, diverged)
    means there is nothing new to release and yields an empty list.
    """
    result = remote.compare_commits(base.sha, head.sha)
    if isinstance(result, Err):
        return result

    comparison = result.value
    if comparison.status != "ahead":
        return Ok([])
    return Ok(list(comparison.commits))
