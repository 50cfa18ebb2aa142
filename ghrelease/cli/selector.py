from __future__ import annotations

import os
import shutil
import sys
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

T = TypeVar("T")

# Rows visible at once; longer lists scroll with the cursor.
WINDOW_SIZE = 4


@dataclass(frozen=True, slots=True)
class SelectorOption(Generic[T]):
    value: T
    label: str
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class SelectorResult(Generic[T]):
    action: Literal["select", "cancel"]
    value: T | None
    index: int


def is_interactive_terminal() -> bool:
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _color_enabled() -> bool:
    if not is_interactive_terminal():
        return False
    if os.getenv("NO_COLOR") is not None:
        return False
    return os.getenv("TERM", "").lower() != "dumb"


def _paint(text: str, *codes: str) -> str:
    if not _color_enabled() or not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


# Single keystrokes in raw mode. Ctrl-C and Ctrl-D arrive as characters.
_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "q": "cancel",
    "Q": "cancel",
    "\x03": "cancel",
    "\x04": "cancel",
    "k": "up",
    "K": "up",
    "j": "down",
    "J": "down",
}
# Second byte after "\x00"/"\xe0" on Windows, third byte after "\x1b[" on POSIX.
_WINDOWS_ARROWS = {"H": "up", "P": "down"}
_ANSI_ARROWS = {"A": "up", "B": "down"}


def _read_key_windows() -> str:
    import msvcrt

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        return _WINDOWS_ARROWS.get(msvcrt.getwch(), "other")
    if ch == "\x1b":
        return "cancel"
    return _KEYS.get(ch, "other")


def _read_key() -> str:
    if os.name == "nt":
        return _read_key_windows()

    import termios
    import tty

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
        if ch == "\x1b":
            # "\x1b[A" and "\x1b[B" are arrow keys; other escape sequences cancel.
            if sys.stdin.read(1) != "[":
                return "cancel"
            return _ANSI_ARROWS.get(sys.stdin.read(1), "cancel")
        return _KEYS.get(ch, "other")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    if width <= 3:
        return text[:width]
    return text[: width - 3] + "..."


def window_bounds(*, count: int, index: int, size: int = WINDOW_SIZE) -> tuple[int, int]:
    """Visible [start, end) slice that keeps ``index`` on screen."""
    if count <= size:
        return (0, count)
    start = min(max(0, index - size + 1), count - size)
    return (start, start + size)


def _render(
    *, title: str, options: list[SelectorOption[object]], index: int, first: bool, drawn: int
) -> int:
    if not first:
        # Move back up over the previous frame and clear it.
        sys.stdout.write(f"\x1b[{drawn}F\x1b[J")

    cols = shutil.get_terminal_size((80, 24)).columns
    lines = [_paint(f"? {title}", "1")]
    start, end = window_bounds(count=len(options), index=index)
    for i in range(start, end):
        opt = options[i]
        detail = f"  {opt.detail}" if opt.detail else ""
        text = _truncate(f"{opt.label}{detail}", max(10, cols - 4))
        if i == index:
            lines.append(_paint(f"> {text}", "1", "36"))
        else:
            lines.append(f"  {text}")
    lines.append(_paint("  Up/Down + Enter, q: cancel", "2"))

    sys.stdout.write("\n".join(lines) + "\n")
    sys.stdout.flush()
    return len(lines)


def select_one(
    *,
    title: str,
    options: list[SelectorOption[T]],
    initial_index: int = 0,
) -> SelectorResult[T]:
    if not options:
        raise ValueError("selector requires at least one option")
    if not is_interactive_terminal():
        raise RuntimeError("interactive selector requires a TTY")

    idx = max(0, min(initial_index, len(options) - 1))
    casted: list[SelectorOption[object]] = [
        SelectorOption(value=o.value, label=o.label, detail=o.detail) for o in options
    ]
    drawn = _render(title=title, options=casted, index=idx, first=True, drawn=0)

    while True:
        key = _read_key()
        if key == "up":
            idx = (idx - 1) % len(options)
        elif key == "down":
            idx = (idx + 1) % len(options)
        elif key == "enter":
            return SelectorResult(action="select", value=options[idx].value, index=idx)
        elif key == "cancel":
            return SelectorResult(action="cancel", value=None, index=idx)
        else:
            continue
        drawn = _render(title=title, options=casted, index=idx, first=False, drawn=drawn)
