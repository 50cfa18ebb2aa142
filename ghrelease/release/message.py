"""Release message template and its edit protocol.

The whole template is commented out, so saving it unedited yields an empty
title and body and the release is aborted. Uncommenting the first line turns
the tag into the title; uncommenting commit lines moves them into the body.

Commits are listed newest first.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from ghrelease.release.model import Commit

_COMMENT_RE = re.compile(r"^\s*#")

_INSTRUCTIONS = """\
#
# Please enter the release title as the first line. Lines starting
# with '#' will be ignored, and an empty title & message aborts the operation.
# By removing starting '#' of lines below, you can put them in release body.
#
#**Commits**
#
"""


def commit_line(commit: Commit) -> str:
    return f"* [{commit.short_sha}] - {commit.subject} ({commit.author})"


def render_message(tag_name: str, commits: Sequence[Commit]) -> str:
    lines = [f"#{commit_line(c)}\n" for c in reversed(commits)]
    return f"#{tag_name}\n{_INSTRUCTIONS}{''.join(lines)}"


def is_comment(line: str) -> bool:
    return _COMMENT_RE.match(line) is not None


def parse_message(text: str) -> tuple[str, str]:
    """Split an edited message into (title, body).

    Comment lines are dropped; the first remaining line is the title and the
    rest, stripped, is the body. No remaining lines gives ("", "").
    """
    lines = [line for line in text.split("\n") if not is_comment(line)]
    if not lines:
        return ("", "")
    return (lines[0], "\n".join(lines[1:]).strip())
