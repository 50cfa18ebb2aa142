from __future__ import annotations

import pytest
import typer

from ghrelease.cli import prompts as prompts_mod
from ghrelease.cli.prompts import TerminalPrompter, branch_options
from ghrelease.output.console import MockConsole
from ghrelease.release.model import Branch, Commit

MAIN = Branch(name="main", head=Commit(sha="b" * 40, message="", author=""))
DEV = Branch(name="dev", head=None)


def _scripted_prompt(
    monkeypatch: pytest.MonkeyPatch, answers: list[str | None]
) -> list[tuple[str, str | None]]:
    asked: list[tuple[str, str | None]] = []

    def fake_prompt(text: str, default: str | None = None, **_: object) -> str:
        asked.append((text, default))
        answer = answers.pop(0)
        if answer is None:
            raise typer.Abort()
        return answer

    monkeypatch.setattr(prompts_mod, "is_interactive_terminal", lambda: False)
    monkeypatch.setattr(prompts_mod.typer, "prompt", fake_prompt)
    return asked


def test_branch_options_mark_current() -> None:
    options = branch_options([MAIN, DEV], "main")
    assert [(o.label, o.detail) for o in options] == [("main", "bbbbbbb (current)"), ("dev", None)]
    assert options[0].value is MAIN


def test_branch_options_current_without_head() -> None:
    options = branch_options([DEV], "dev")
    assert options[0].detail == "(current)"


def test_numbered_pick(monkeypatch: pytest.MonkeyPatch) -> None:
    asked = _scripted_prompt(monkeypatch, ["2"])
    console = MockConsole()

    chosen = TerminalPrompter(console).select_target([MAIN, DEV], current="main")

    assert chosen is DEV
    assert asked == [("Choose a target branch", "1")]
    assert console.messages == [" 1. main  bbbbbbb (current)", " 2. dev"]


def test_numbered_pick_retries_on_bad_input(monkeypatch: pytest.MonkeyPatch) -> None:
    _scripted_prompt(monkeypatch, ["x", "9", "1"])
    console = MockConsole()

    chosen = TerminalPrompter(console).select_target([MAIN, DEV], current="main")

    assert chosen is MAIN
    assert console.messages[-2:] == ["error: invalid number", "error: out of range"]


def test_numbered_pick_abort_returns_none(monkeypatch: pytest.MonkeyPatch) -> None:
    _scripted_prompt(monkeypatch, [None])
    assert TerminalPrompter(MockConsole()).select_target([MAIN], current="main") is None


def test_prompt_tag_uses_suggested_default(monkeypatch: pytest.MonkeyPatch) -> None:
    asked = _scripted_prompt(monkeypatch, ["  v1.0.2 "])

    tag = TerminalPrompter(MockConsole()).prompt_tag(default="v1.0.1", last_release="v1.0.0")

    assert tag == "v1.0.2"
    assert asked == [("Enter release tag (last release: v1.0.0)", "v1.0.1")]


@pytest.mark.parametrize("answer", [None, "   "])
def test_prompt_tag_cancel_or_blank(monkeypatch: pytest.MonkeyPatch, answer: str | None) -> None:
    _scripted_prompt(monkeypatch, [answer])
    assert TerminalPrompter(MockConsole()).prompt_tag(default="v1", last_release="v0") is None
