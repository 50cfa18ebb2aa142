from __future__ import annotations

from ghrelease.core.result import Err, Ok
from ghrelease.release.diff import compare
from ghrelease.release.errors import ReleaseError
from ghrelease.release.gh import ScriptedRemote
from ghrelease.release.model import Commit, Comparison

BASE = Commit(sha="a" * 40, message="release", author="Alice")
HEAD = Commit(sha="b" * 40, message="", author="")
C1 = Commit(sha="c" * 40, message="Fix bug", author="Alice")
C2 = Commit(sha="d" * 40, message="Add feature", author="Bob")


def test_ahead_returns_commits_in_service_order() -> None:
    remote = ScriptedRemote(
        comparisons={(BASE.sha, HEAD.sha): Comparison(status="ahead", commits=(C1, C2))}
    )
    assert compare(remote, base=BASE, head=HEAD) == Ok([C1, C2])
    assert remote.calls == [f"compare_commits:{BASE.sha}...{HEAD.sha}"]


def test_identical_is_nothing_new() -> None:
    remote = ScriptedRemote()
    assert compare(remote, base=BASE, head=BASE) == Ok([])


def test_behind_and_diverged_are_nothing_new() -> None:
    for status in ("behind", "diverged"):
        remote = ScriptedRemote(
            comparisons={(BASE.sha, HEAD.sha): Comparison(status=status, commits=(C1,))}
        )
        assert compare(remote, base=BASE, head=HEAD) == Ok([])


def test_transport_error_propagates() -> None:
    error = ReleaseError(kind="api_failed", message="unable to compare commits", hint="HTTP 502")
    remote = ScriptedRemote(comparisons={(BASE.sha, HEAD.sha): error})
    assert compare(remote, base=BASE, head=HEAD) == Err(error)
