from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass

from ghrelease.core.result import Err, Ok, Result
from ghrelease.release.errors import ReleaseError
from ghrelease.release.gh import RemoteService
from ghrelease.release.model import Branch, Release


@dataclass(frozen=True, slots=True)
class RemoteState:
    latest: Release | None
    branches: list[Branch]


def fetch_remote_state(remote: RemoteService) -> Result[RemoteState, ReleaseError]:
    """Read the latest release and the branch list in parallel.

    Both reads always run to completion; the first error to come back wins.
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="ghrelease") as pool:
        latest_f: Future[Result[Release | None, ReleaseError]] = pool.submit(
            remote.get_latest_release
        )
        branches_f: Future[Result[list[Branch], ReleaseError]] = pool.submit(
            remote.list_branches
        )
        first_error: ReleaseError | None = None
        for done in as_completed([latest_f, branches_f]):
            result = done.result()
            if isinstance(result, Err) and first_error is None:
                first_error = result.error

    if first_error is not None:
        return Err(first_error)

    latest = latest_f.result()
    branches = branches_f.result()
    assert isinstance(latest, Ok) and isinstance(branches, Ok)
    return Ok(RemoteState(latest=latest.value, branches=branches.value))
