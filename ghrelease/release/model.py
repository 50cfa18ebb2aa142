from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal


CompareStatus = Literal["ahead", "behind", "identical", "diverged"]

SHORT_SHA_LEN = 7


@dataclass(frozen=True, slots=True)
class RepoSlug:
    owner: str
    name: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True, slots=True)
class Commit:
    sha: str
    message: str
    author: str

    @property
    def short_sha(self) -> str:
        return self.sha[:SHORT_SHA_LEN]

    @property
    def subject(self) -> str:
        return self.message.split("\n", 1)[0].strip()


@dataclass(frozen=True, slots=True)
class Tag:
    name: str
    target: Commit | None
    # Total commits reachable from the tag, when the service reports it.
    commit_count: int = 0


@dataclass(frozen=True, slots=True)
class Branch:
    name: str
    head: Commit | None
    commit_count: int = 0


@dataclass(frozen=True, slots=True)
class Release:
    name: str
    body: str
    tag: Tag
    # Set only by a successful create.
    html_url: str | None = None

    def with_url(self, url: str) -> Release:
        return replace(self, html_url=url)


@dataclass(frozen=True, slots=True)
class Comparison:
    status: CompareStatus
    commits: tuple[Commit, ...]
