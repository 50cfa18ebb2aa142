"""Console output for the drafting workflow.

The CLI hands a ConsoleProtocol to the workflow. Implementations keep no
state that matters to the caller, so the Rich console and the capturing mock
are interchangeable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    INFO = auto()
    DIM = auto()
    BOLD = auto()


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...


_RICH_STYLES: dict[Style, str] = {
    Style.DEFAULT: "",
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.INFO: "cyan",
    Style.DIM: "dim",
    Style.BOLD: "bold",
}


class RichConsole:
    """ConsoleProtocol on top of a rich Console.

    Messages are printed with markup disabled: branch names, tags and commit
    subjects may contain square brackets.
    """

    def __init__(self) -> None:
        from rich.console import Console

        self._console = Console(highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=_RICH_STYLES[style] or None, markup=False)

    def _labelled(self, label: str, label_style: str, message: str) -> None:
        from rich.text import Text

        line = Text(label, style=label_style)
        line.append(f" {message}")
        self._console.print(line)

    def success(self, message: str) -> None:
        self._labelled("OK", "green bold", message)

    def error(self, message: str) -> None:
        self._labelled("error:", "red bold", message)

    def info(self, message: str) -> None:
        self._labelled("info:", "cyan", message)


@dataclass
class OutputRecord:
    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Records every message with the prefix the Rich console would show."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    def has_error(self) -> bool:
        return any(o.style is Style.ERROR for o in self.outputs)

    def has_success(self) -> bool:
        return any(o.style is Style.SUCCESS for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
