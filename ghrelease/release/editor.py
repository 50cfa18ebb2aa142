from __future__ import annotations

import shlex
import shutil
from dataclasses import dataclass
from pathlib import Path

from ghrelease.core.result import Err, Ok, Result
from ghrelease.platform.process import run_attached
from ghrelease.release.errors import ReleaseError

RELEASE_MSG_FILENAME = "RELEASE_EDITMSG"


def resolve_editor(command: str) -> Result[list[str], ReleaseError]:
    """Turn an $EDITOR value into an argv with an absolute program path."""
    try:
        parts = shlex.split(command)
    except ValueError as e:
        return Err(ReleaseError(kind="editor_missing", message=f"invalid editor command: {e}"))
    if not parts:
        return Err(ReleaseError(kind="editor_missing", message="no editor configured"))

    program = shutil.which(parts[0])
    if program is None:
        return Err(
            ReleaseError(
                kind="editor_missing",
                message=f"unable to find editor({parts[0]})",
                hint="set EDITOR to an installed editor",
            )
        )
    return Ok([program, *parts[1:]])


@dataclass(frozen=True, slots=True)
class ScopedEditor:
    """Edits text through a scratch file inside the git metadata directory.

    The file is overwritten on every run and left in place afterwards.
    """

    cmd: tuple[str, ...]
    path: Path

    @classmethod
    def in_git_dir(cls, cmd: list[str], git_dir: Path) -> ScopedEditor:
        return cls(cmd=tuple(cmd), path=git_dir / RELEASE_MSG_FILENAME)

    def edit(self, text: str) -> Result[str, ReleaseError]:
        try:
            self.path.write_text(text, encoding="utf-8")
        except OSError as e:
            return Err(
                ReleaseError(
                    kind="io_failed",
                    message="unable to write release message",
                    hint=str(e),
                )
            )

        # The editor starts where the user ran the command, not in the git dir.
        ran = run_attached([*self.cmd, str(self.path)], cwd=Path.cwd())
        if isinstance(ran, Err):
            return Err(ReleaseError(kind="edit_failed", message="edit error", hint=str(ran.error)))

        try:
            return Ok(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            return Err(
                ReleaseError(
                    kind="io_failed",
                    message="unable to read release message",
                    hint=str(e),
                )
            )
