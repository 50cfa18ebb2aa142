"""GitHub access for the drafting workflow.

`RemoteService` is the boundary the state machine talks to. `GitHubService`
implements it over the REST API through an injectable HttpClient;
`ScriptedRemote` returns canned values so the workflow runs without network.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, cast
from urllib.parse import quote

from ghrelease.core.result import Err, Ok, Result
from ghrelease.core.structured import (
    as_obj_list,
    as_str_dict,
    get_raw_str,
    get_str,
    get_table,
)
from ghrelease.net.http import HttpClient, HttpError
from ghrelease.release.errors import ReleaseError
from ghrelease.release.model import (
    Branch,
    Commit,
    Comparison,
    CompareStatus,
    Release,
    RepoSlug,
    Tag,
)

_COMPARE_STATUSES: frozenset[str] = frozenset({"ahead", "behind", "identical", "diverged"})
BRANCHES_PER_PAGE = 100


class RemoteService(Protocol):
    def get_latest_release(self) -> Result[Release | None, ReleaseError]:
        """Latest published release, or None when the repository has none."""
        ...

    def list_branches(self) -> Result[list[Branch], ReleaseError]: ...

    def compare_commits(self, base: str, head: str) -> Result[Comparison, ReleaseError]:
        """Commits reachable from head but not from base, oldest first."""
        ...

    def create_release(self, release: Release) -> Result[Release, ReleaseError]:
        """Publish release; the returned copy has html_url set."""
        ...


def _api_error(context: str, error: HttpError) -> ReleaseError:
    return ReleaseError(kind="api_failed", message=context, hint=str(error))


def _payload_error(context: str, what: str) -> ReleaseError:
    return ReleaseError(kind="api_failed", message=context, hint=f"unexpected payload: {what}")


def parse_commit(data: Mapping[str, object]) -> Commit | None:
    """Build a Commit from a REST commit object (``GET /commits/{ref}`` shape)."""
    sha = get_str(data, "sha")
    if sha is None:
        return None

    message = ""
    author = ""
    commit_tbl = get_table(data, "commit")
    if commit_tbl is not None:
        message = get_raw_str(commit_tbl, "message") or ""
        author_tbl = get_table(commit_tbl, "author")
        if author_tbl is not None:
            author = get_str(author_tbl, "name") or ""
    if not author:
        # Fall back to the GitHub account when the git author has no name.
        user_tbl = get_table(data, "author")
        if user_tbl is not None:
            author = get_str(user_tbl, "login") or ""

    return Commit(sha=sha, message=message, author=author)


def _parse_branches(items: list[object]) -> list[Branch]:
    out: list[Branch] = []
    for item in items:
        d = as_str_dict(item)
        if d is None:
            continue
        name = get_str(d, "name")
        if name is None:
            continue
        head: Commit | None = None
        commit_tbl = get_table(d, "commit")
        if commit_tbl is not None:
            sha = get_str(commit_tbl, "sha")
            if sha is not None:
                head = Commit(sha=sha, message="", author="")
        out.append(Branch(name=name, head=head))
    return out


class GitHubService:
    """RemoteService backed by the GitHub REST API v3."""

    def __init__(self, *, http: HttpClient, slug: RepoSlug, api_url: str) -> None:
        self._http = http
        self._slug = slug
        self._base = f"{api_url.rstrip('/')}/repos/{slug.owner}/{slug.name}"

    @property
    def slug(self) -> RepoSlug:
        return self._slug

    def _url(self, path: str) -> str:
        return f"{self._base}/{path}"

    def get_latest_release(self) -> Result[Release | None, ReleaseError]:
        context = "unable to get latest release"
        result = self._http.get_json(self._url("releases/latest"))
        if isinstance(result, Err):
            if result.error.status == 404:
                return Ok(None)
            return Err(_api_error(context, result.error))

        data = as_str_dict(result.value)
        if data is None:
            return Err(_payload_error(context, "release"))
        tag_name = get_str(data, "tag_name")
        if tag_name is None:
            return Err(_payload_error(context, "release.tag_name"))

        commit_r = self._http.get_json(self._url(f"commits/{quote(tag_name, safe='')}"))
        if isinstance(commit_r, Err):
            return Err(_api_error(f"unable to resolve tag {tag_name}", commit_r.error))
        commit_data = as_str_dict(commit_r.value)
        target = parse_commit(commit_data) if commit_data is not None else None
        if target is None:
            return Err(_payload_error(context, f"commit for tag {tag_name}"))

        return Ok(
            Release(
                name=get_str(data, "name") or tag_name,
                body=get_raw_str(data, "body") or "",
                tag=Tag(name=tag_name, target=target),
                html_url=get_str(data, "html_url"),
            )
        )

    def list_branches(self) -> Result[list[Branch], ReleaseError]:
        """All branches, following pages until one comes back short."""
        out: list[Branch] = []
        page = 1
        while True:
            raw = self._branch_page(page)
            if isinstance(raw, Err):
                return raw
            out.extend(_parse_branches(raw.value))
            if len(raw.value) < BRANCHES_PER_PAGE:
                return Ok(out)
            page += 1

    def _branch_page(self, page: int) -> Result[list[object], ReleaseError]:
        context = "unable to list branches"
        endpoint = f"branches?per_page={BRANCHES_PER_PAGE}"
        if page > 1:
            endpoint += f"&page={page}"
        result = self._http.get_json(self._url(endpoint)).map_err(
            lambda e: _api_error(context, e)
        )
        if isinstance(result, Err):
            return result

        raw = as_obj_list(result.value)
        if raw is None:
            return Err(_payload_error(context, "branches"))
        return Ok(raw)

    def compare_commits(self, base: str, head: str) -> Result[Comparison, ReleaseError]:
        """Compare two commits with one request.

        GitHub lists at most 250 commits in a single comparison, so a larger
        range comes back with only part of its commits.
        """
        context = "unable to compare commits"
        endpoint = f"compare/{quote(base, safe='')}...{quote(head, safe='')}"
        result = self._http.get_json(self._url(endpoint)).map_err(
            lambda e: _api_error(context, e)
        )
        if isinstance(result, Err):
            return result

        data = as_str_dict(result.value)
        if data is None:
            return Err(_payload_error(context, "compare"))
        status = get_str(data, "status")
        if status not in _COMPARE_STATUSES:
            return Err(_payload_error(context, f"compare status {status!r}"))

        commits: list[Commit] = []
        for item in as_obj_list(data.get("commits")) or []:
            d = as_str_dict(item)
            commit = parse_commit(d) if d is not None else None
            if commit is not None:
                commits.append(commit)

        return Ok(Comparison(status=cast(CompareStatus, status), commits=tuple(commits)))

    def create_release(self, release: Release) -> Result[Release, ReleaseError]:
        context = "unable to create new release"
        if not release.name or not release.body:
            return Err(
                ReleaseError(kind="invalid_input", message="empty release title and message")
            )
        if release.tag.target is None:
            return Err(ReleaseError(kind="invalid_input", message="release target is unknown"))

        payload: dict[str, object] = {
            "name": release.name,
            "tag_name": release.tag.name,
            "target_commitish": release.tag.target.sha,
            "body": release.body,
        }
        result = self._http.post_json(self._url("releases"), payload).map_err(
            lambda e: _api_error(context, e)
        )
        if isinstance(result, Err):
            return result

        data = as_str_dict(result.value)
        url = get_str(data, "html_url") if data is not None else None
        if url is None:
            return Err(_payload_error(context, "release.html_url"))
        return Ok(release.with_url(url))


def _no_branches() -> list[Branch]:
    return []


def _no_comparisons() -> dict[tuple[str, str], Comparison | ReleaseError]:
    return {}


def _no_releases() -> list[Release]:
    return []


def _no_calls() -> list[str]:
    return []


@dataclass
class ScriptedRemote:
    """RemoteService returning scripted values, for tests.

    Comparisons are looked up by (base, head); a missing pair compares as
    "identical". Created releases are recorded and get ``url_template``
    formatted with the tag name as their URL.
    """

    latest: Release | ReleaseError | None = None
    branches: list[Branch] | ReleaseError = field(default_factory=_no_branches)
    comparisons: dict[tuple[str, str], Comparison | ReleaseError] = field(
        default_factory=_no_comparisons
    )
    create_error: ReleaseError | None = None
    url_template: str = "https://github.com/example/project/releases/tag/{tag}"
    created: list[Release] = field(default_factory=_no_releases)
    calls: list[str] = field(default_factory=_no_calls)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def _record(self, call: str) -> None:
        with self._lock:
            self.calls.append(call)

    def get_latest_release(self) -> Result[Release | None, ReleaseError]:
        self._record("get_latest_release")
        if isinstance(self.latest, ReleaseError):
            return Err(self.latest)
        return Ok(self.latest)

    def list_branches(self) -> Result[list[Branch], ReleaseError]:
        self._record("list_branches")
        if isinstance(self.branches, ReleaseError):
            return Err(self.branches)
        return Ok(list(self.branches))

    def compare_commits(self, base: str, head: str) -> Result[Comparison, ReleaseError]:
        self._record(f"compare_commits:{base}...{head}")
        scripted = self.comparisons.get((base, head))
        if scripted is None:
            return Ok(Comparison(status="identical", commits=()))
        if isinstance(scripted, ReleaseError):
            return Err(scripted)
        return Ok(scripted)

    def create_release(self, release: Release) -> Result[Release, ReleaseError]:
        self._record("create_release")
        if self.create_error is not None:
            return Err(self.create_error)
        if not release.name or not release.body:
            return Err(
                ReleaseError(kind="invalid_input", message="empty release title and message")
            )
        created = release.with_url(self.url_template.format(tag=release.tag.name))
        self.created.append(created)
        return Ok(created)

