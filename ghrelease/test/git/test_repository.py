"""Tests for git/repository.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from ghrelease.core.result import Err, Ok, Result
from ghrelease.git import repository as repo_mod
from ghrelease.git.repository import Repository, parse_repo_slug
from ghrelease.platform.process import ProcessError


class TestParseRepoSlug:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("git@github.com:hassansin/gh-release.git", ("hassansin", "gh-release")),
            ("git@github.com:hassansin/gh-release", ("hassansin", "gh-release")),
            ("https://github.com/hassansin/gh-release.git", ("hassansin", "gh-release")),
            ("https://github.com/hassansin/gh-release/", ("hassansin", "gh-release")),
            ("ssh://git@github.com/my-org/my.repo.git", ("my-org", "my.repo")),
            ("https://github.com/Owner_1/Repo-2\n", ("Owner_1", "Repo-2")),
        ],
    )
    def test_valid_urls(self, url: str, expected: tuple[str, str]) -> None:
        assert parse_repo_slug(url) == expected

    @pytest.mark.parametrize("url", ["", "origin", "/just/a/path!", "https://github.com"])
    def test_invalid_urls(self, url: str) -> None:
        assert parse_repo_slug(url) is None


def _fake_git(outputs: dict[str, Result[str, ProcessError]]):
    calls: list[list[str]] = []

    def fake_run(
        cmd: list[str], cwd: Path, *, timeout: float | None = None
    ) -> Result[str, ProcessError]:
        del cwd, timeout
        calls.append(cmd)
        # cmd = ["git", "-C", path, *args]
        key = " ".join(cmd[3:])
        return outputs.get(
            key, Err(ProcessError(command=tuple(cmd), returncode=128, stdout="", stderr="fatal"))
        )

    return fake_run, calls


def _err(stderr: str) -> Err[ProcessError]:
    return Err(ProcessError(command=("git",), returncode=128, stdout="", stderr=stderr))


class TestRepository:
    def test_is_inside_work_tree(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        fake, calls = _fake_git({"rev-parse --is-inside-work-tree": Ok("true\n")})
        monkeypatch.setattr(repo_mod, "run_process", fake)

        assert Repository(tmp_path).is_inside_work_tree() is True
        assert calls == [["git", "-C", str(tmp_path), "rev-parse", "--is-inside-work-tree"]]

    def test_not_inside_work_tree(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        fake, _ = _fake_git({})
        monkeypatch.setattr(repo_mod, "run_process", fake)
        assert Repository(tmp_path).is_inside_work_tree() is False

    def test_current_branch(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        fake, _ = _fake_git({"rev-parse --abbrev-ref HEAD": Ok("feature/x\n")})
        monkeypatch.setattr(repo_mod, "run_process", fake)
        assert Repository(tmp_path).current_branch() == "feature/x"

    def test_current_branch_detached(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        fake, _ = _fake_git({"rev-parse --abbrev-ref HEAD": Ok("HEAD\n")})
        monkeypatch.setattr(repo_mod, "run_process", fake)
        assert Repository(tmp_path).current_branch() is None

    def test_remote_url(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        fake, _ = _fake_git({"remote get-url origin": Ok("git@github.com:o/r.git\n")})
        monkeypatch.setattr(repo_mod, "run_process", fake)
        assert Repository(tmp_path).remote_url() == Ok("git@github.com:o/r.git")

    def test_remote_url_missing(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        fake, _ = _fake_git({"remote get-url upstream": _err("error: No such remote 'upstream'\n")})
        monkeypatch.setattr(repo_mod, "run_process", fake)

        result = Repository(tmp_path).remote_url("upstream")

        assert isinstance(result, Err)
        assert result.error.command == "remote get-url"
        assert result.error.message == "error: No such remote 'upstream'"

    def test_git_dir_relative_is_resolved(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        fake, _ = _fake_git({"rev-parse --git-dir": Ok(".git\n")})
        monkeypatch.setattr(repo_mod, "run_process", fake)
        assert Repository(tmp_path).git_dir() == Ok(tmp_path / ".git")

    def test_git_dir_absolute(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        fake, _ = _fake_git({"rev-parse --git-dir": Ok("/elsewhere/.git\n")})
        monkeypatch.setattr(repo_mod, "run_process", fake)
        assert Repository(tmp_path).git_dir() == Ok(Path("/elsewhere/.git"))

