"""Release drafting workflow.

One run walks these steps, each a handler over a frozen DraftSession:

    init -> repo_detected -> remote_loaded -> select_target -> diff
         -> tag -> message -> submit

Handlers either advance to the next step, abort (user cancel, nothing to
release, empty message; exit status 0) or fail with a ReleaseError.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Protocol

from ghrelease.core.result import Err, Ok, Result
from ghrelease.git.repository import GitError, parse_repo_slug
from ghrelease.output.console import ConsoleProtocol, Style
from ghrelease.release.branches import rank_branches
from ghrelease.release.diff import compare
from ghrelease.release.errors import ReleaseError
from ghrelease.release.fetch import fetch_remote_state
from ghrelease.release.fsm import (
    FINISH,
    StepAbort,
    StepHandler,
    StepOutcome,
    Terminal,
    abort,
    advance,
    run_state_machine,
)
from ghrelease.release.gh import RemoteService
from ghrelease.release.message import parse_message, render_message
from ghrelease.release.model import Branch, Commit, Release, RepoSlug, Tag
from ghrelease.release.semver import next_version


class LocalRepo(Protocol):
    def is_inside_work_tree(self) -> bool: ...

    def current_branch(self) -> str | None: ...

    def remote_url(self, name: str = "origin") -> Result[str, GitError]: ...

    def git_dir(self) -> Result[Path, GitError]: ...


class Prompter(Protocol):
    def select_target(self, branches: Sequence[Branch], *, current: str) -> Branch | None:
        """Pick a target branch; None when the user cancels."""
        ...

    def prompt_tag(self, *, default: str, last_release: str) -> str | None:
        """Ask for the release tag; None when the user cancels."""
        ...


class MessageEditor(Protocol):
    def edit(self, text: str) -> Result[str, ReleaseError]: ...


@dataclass(frozen=True, slots=True)
class DraftDeps:
    repo: LocalRepo
    make_remote: Callable[[RepoSlug], RemoteService]
    make_editor: Callable[[Path], MessageEditor]
    prompter: Prompter
    console: ConsoleProtocol
    remote_name: str = "origin"
    git_dir: Path | None = None


def _no_branches() -> tuple[Branch, ...]:
    return ()


def _no_commits() -> tuple[Commit, ...]:
    return ()


@dataclass(frozen=True, slots=True)
class DraftSession:
    step: str = "init"
    slug: RepoSlug | None = None
    head: str | None = None
    git_dir: Path | None = None
    remote: RemoteService | None = None
    latest: Release | None = None
    branches: tuple[Branch, ...] = field(default_factory=_no_branches)
    target: Branch | None = None
    commits: tuple[Commit, ...] = field(default_factory=_no_commits)
    suggested_tag: str | None = None
    tag_name: str | None = None
    title: str = ""
    body: str = ""


_Handler = Callable[[DraftDeps, DraftSession], Result[StepOutcome[DraftSession], ReleaseError]]


def _missing(what: str) -> Err[ReleaseError]:
    return Err(ReleaseError(kind="invalid_input", message=f"drafting state is missing {what}"))


def _step_init(deps: DraftDeps, s: DraftSession) -> Result[StepOutcome[DraftSession], ReleaseError]:
    repo = deps.repo
    if not repo.is_inside_work_tree():
        return Err(ReleaseError(kind="not_a_repo", message="not a git repo"))

    url = repo.remote_url(deps.remote_name)
    if isinstance(url, Err):
        return Err(
            ReleaseError(
                kind="remote_missing",
                message=f"unable to read remote {deps.remote_name}",
                hint=url.error.message,
            )
        )

    parsed = parse_repo_slug(url.value)
    if parsed is None:
        return Err(
            ReleaseError(
                kind="remote_missing",
                message="unable to find repository owner/name in remote url",
                hint=url.value,
            )
        )

    head = repo.current_branch()
    if head is None:
        return Err(
            ReleaseError(
                kind="detached_head",
                message="unable to determine the current branch",
                hint="check out a branch first",
            )
        )

    git_dir = deps.git_dir
    if git_dir is None:
        found = repo.git_dir()
        if isinstance(found, Err):
            return Err(ReleaseError(kind="not_a_repo", message=found.error.message))
        git_dir = found.value

    slug = RepoSlug(owner=parsed[0], name=parsed[1])
    deps.console.print(f"{slug} ({head})", Style.DIM)
    return Ok(advance(replace(s, step="repo_detected", slug=slug, head=head, git_dir=git_dir)))


def _step_repo_detected(
    deps: DraftDeps, s: DraftSession
) -> Result[StepOutcome[DraftSession], ReleaseError]:
    if s.slug is None or s.head is None:
        return _missing("repository")

    remote = deps.make_remote(s.slug)
    state = fetch_remote_state(remote)
    if isinstance(state, Err):
        return state

    ranked = rank_branches(state.value.branches, s.head)
    return Ok(
        advance(
            replace(
                s,
                step="remote_loaded",
                remote=remote,
                latest=state.value.latest,
                branches=tuple(ranked),
            )
        )
    )


def _step_remote_loaded(
    deps: DraftDeps, s: DraftSession
) -> Result[StepOutcome[DraftSession], ReleaseError]:
    # First-release bootstrap is not supported: a previous release is required.
    if s.latest is None:
        return Err(
            ReleaseError(
                kind="no_release",
                message="no previous release",
                hint="publish the first release on GitHub",
            )
        )
    if s.latest.tag.target is None:
        return _missing("latest release commit")
    if not s.branches:
        return Ok(abort(f"no branches found in {s.slug}"))
    return Ok(advance(replace(s, step="select_target")))


def _step_select_target(
    deps: DraftDeps, s: DraftSession
) -> Result[StepOutcome[DraftSession], ReleaseError]:
    target = deps.prompter.select_target(s.branches, current=s.head or "")
    if target is None:
        return Ok(abort())
    deps.console.print(f"Target: {target.name}", Style.BOLD)
    return Ok(advance(replace(s, step="diff", target=target)))


def _step_diff(deps: DraftDeps, s: DraftSession) -> Result[StepOutcome[DraftSession], ReleaseError]:
    if s.remote is None or s.latest is None or s.latest.tag.target is None or s.target is None:
        return _missing("comparison inputs")
    if s.target.head is None:
        return Err(
            ReleaseError(kind="invalid_input", message=f"branch {s.target.name} has no commits")
        )

    suggested = next_version(s.latest.tag.name)
    if isinstance(suggested, Err):
        return suggested

    commits = compare(s.remote, base=s.latest.tag.target, head=s.target.head)
    if isinstance(commits, Err):
        return commits
    if not commits.value:
        return Ok(abort(f"{s.target.name} is already released"))

    return Ok(
        advance(
            replace(
                s,
                step="tag",
                commits=tuple(commits.value),
                suggested_tag=suggested.value,
            )
        )
    )


def _step_tag(deps: DraftDeps, s: DraftSession) -> Result[StepOutcome[DraftSession], ReleaseError]:
    if s.latest is None or s.suggested_tag is None:
        return _missing("suggested tag")

    tag_name = deps.prompter.prompt_tag(default=s.suggested_tag, last_release=s.latest.tag.name)
    if tag_name is None or not tag_name.strip():
        return Ok(abort())
    return Ok(advance(replace(s, step="message", tag_name=tag_name.strip())))


def _step_message(
    deps: DraftDeps, s: DraftSession
) -> Result[StepOutcome[DraftSession], ReleaseError]:
    if s.git_dir is None or s.tag_name is None:
        return _missing("tag name")

    editor = deps.make_editor(s.git_dir)
    edited = editor.edit(render_message(s.tag_name, s.commits))
    if isinstance(edited, Err):
        return edited

    title, body = parse_message(edited.value)
    if not title.strip() or not body:
        return Ok(abort("aborting due to empty release title or message"))
    return Ok(advance(replace(s, step="submit", title=title.strip(), body=body)))


def _step_submit(
    deps: DraftDeps, s: DraftSession
) -> Result[StepOutcome[DraftSession], ReleaseError]:
    if s.remote is None or s.target is None or s.target.head is None or s.tag_name is None:
        return _missing("release inputs")

    draft = Release(
        name=s.title,
        body=s.body,
        tag=Tag(name=s.tag_name, target=s.target.head),
    )
    created = s.remote.create_release(draft)
    if isinstance(created, Err):
        e = created.error
        if e.kind == "api_failed":
            return created
        # Anything the service rejects at submission is reported as an API failure.
        return Err(
            ReleaseError(kind="api_failed", message="unable to create new release", hint=e.pretty())
        )

    deps.console.success(f"New release({created.value.tag.name}) created:")
    deps.console.print(f"  {created.value.html_url}")
    return Ok(FINISH)


_STEPS: dict[str, _Handler] = {
    "init": _step_init,
    "repo_detected": _step_repo_detected,
    "remote_loaded": _step_remote_loaded,
    "select_target": _step_select_target,
    "diff": _step_diff,
    "tag": _step_tag,
    "message": _step_message,
    "submit": _step_submit,
}


def run_draft(deps: DraftDeps) -> Result[Terminal, ReleaseError]:
    """Run the drafting workflow to completion.

    Returns Ok(StepFinish) when a release was created, Ok(StepAbort) when the
    run stopped without releasing anything, Err on failure. Abort reasons are
    printed here.
    """

    def bind(handler: _Handler) -> StepHandler[DraftSession]:
        return lambda s: handler(deps, s)

    result = run_state_machine(
        initial_state=DraftSession(),
        get_step=lambda s: s.step,
        handlers={name: bind(h) for name, h in _STEPS.items()},
    )
    if isinstance(result, Ok) and isinstance(result.value, StepAbort) and result.value.reason:
        deps.console.info(result.value.reason)
    return result
