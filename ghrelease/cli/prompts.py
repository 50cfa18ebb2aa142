from __future__ import annotations

from collections.abc import Sequence

import typer

from ghrelease.cli.selector import SelectorOption, is_interactive_terminal, select_one
from ghrelease.output.console import ConsoleProtocol, Style
from ghrelease.release.model import Branch


def branch_options(branches: Sequence[Branch], current: str | None) -> list[SelectorOption[Branch]]:
    options: list[SelectorOption[Branch]] = []
    for b in branches:
        detail = b.head.short_sha if b.head is not None else ""
        if b.name == current:
            detail = f"{detail} (current)".strip()
        options.append(SelectorOption(value=b, label=b.name, detail=detail or None))
    return options


class TerminalPrompter:
    """Interactive prompts for the drafting workflow.

    Ctrl-C or EOF at any prompt returns None, which the workflow treats as a
    clean abort.
    """

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def select_target(self, branches: Sequence[Branch], *, current: str) -> Branch | None:
        options = branch_options(branches, current)
        if is_interactive_terminal():
            result = select_one(title="Choose a target branch", options=options)
            if result.action == "cancel":
                return None
            return result.value
        return self._pick_by_number(options)

    def _pick_by_number(self, options: list[SelectorOption[Branch]]) -> Branch | None:
        for i, opt in enumerate(options, start=1):
            detail = f"  {opt.detail}" if opt.detail else ""
            self._console.print(f"{i:2}. {opt.label}{detail}", Style.DIM)

        while True:
            try:
                raw = typer.prompt("Choose a target branch", default="1")
            except typer.Abort:
                return None
            try:
                idx = int(raw)
            except ValueError:
                self._console.error("invalid number")
                continue
            if idx < 1 or idx > len(options):
                self._console.error("out of range")
                continue
            return options[idx - 1].value

    def prompt_tag(self, *, default: str, last_release: str) -> str | None:
        try:
            tag: str = typer.prompt(
                f"Enter release tag (last release: {last_release})",
                default=default,
            )
        except typer.Abort:
            return None
        return tag.strip() or None
