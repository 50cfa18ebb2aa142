"""Error type for the release drafting workflow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "not_a_repo",
    "remote_missing",
    "detached_head",
    "editor_missing",
    "invalid_tag",
    "invalid_input",
    "no_release",
    "api_failed",
    "edit_failed",
    "io_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    ``message`` is prefixed with the operation that failed ("unable to list
    branches"), ``hint`` carries the underlying cause when there is one.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message}: {self.hint}"
        return self.message
