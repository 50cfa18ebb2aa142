from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from ghrelease import __version__
from ghrelease.cli.prompts import TerminalPrompter
from ghrelease.core.config import Config, load_config
from ghrelease.core.errors import ErrorCode
from ghrelease.core.result import Err
from ghrelease.git.repository import Repository
from ghrelease.net.http import RealHttpClient
from ghrelease.output.console import RichConsole
from ghrelease.release.drafting import DraftDeps, MessageEditor, run_draft
from ghrelease.release.editor import ScopedEditor, resolve_editor
from ghrelease.release.errors import ReleaseErrorKind
from ghrelease.release.gh import GitHubService, RemoteService
from ghrelease.release.model import RepoSlug


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    help="Draft and publish a GitHub release for the current repository.",
)


def exit_error(message: str, *, code: ErrorCode) -> NoReturn:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=int(code))


def release_error_code(kind: ReleaseErrorKind) -> ErrorCode:
    if kind in {"not_a_repo", "remote_missing", "detached_head", "editor_missing"}:
        return ErrorCode.ENV_ERROR
    if kind in {"api_failed"}:
        return ErrorCode.NETWORK_ERROR
    if kind in {"io_failed"}:
        return ErrorCode.IO_ERROR
    return ErrorCode.USER_ERROR


def build_deps(
    *, config: Config, editor_cmd: list[str], repo: Repository, remote_name: str
) -> DraftDeps:
    console = RichConsole()

    def make_remote(slug: RepoSlug) -> RemoteService:
        return GitHubService(http=RealHttpClient(config.token), slug=slug, api_url=config.api_url)

    def make_editor(git_dir: Path) -> MessageEditor:
        return ScopedEditor.in_git_dir(editor_cmd, git_dir)

    return DraftDeps(
        repo=repo,
        make_remote=make_remote,
        make_editor=make_editor,
        prompter=TerminalPrompter(console),
        console=console,
        remote_name=remote_name,
        git_dir=Path(config.git_dir).resolve() if config.git_dir else None,
    )


@app.command()
def release(
    remote: str = typer.Option("origin", "--remote", help="Git remote pointing at GitHub."),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Pick a target branch, edit the release message and publish the release."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    repo = Repository(Path.cwd())
    if not repo.is_inside_work_tree():
        exit_error("not a git repo", code=ErrorCode.ENV_ERROR)

    config = load_config()
    if isinstance(config, Err):
        exit_error(config.error.message, code=ErrorCode.ENV_ERROR)

    editor_cmd = resolve_editor(config.value.editor)
    if isinstance(editor_cmd, Err):
        exit_error(editor_cmd.error.pretty(), code=ErrorCode.ENV_ERROR)

    deps = build_deps(
        config=config.value,
        editor_cmd=editor_cmd.value,
        repo=repo,
        remote_name=remote,
    )
    try:
        result = run_draft(deps)
    except KeyboardInterrupt:
        raise typer.Exit(code=0)

    if isinstance(result, Err):
        exit_error(result.error.pretty(), code=release_error_code(result.error.kind))


def main() -> None:
    app()
