from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from ghrelease.core.result import Err, Ok, Result
from ghrelease.release.errors import ReleaseError

S = TypeVar("S")


@dataclass(frozen=True, slots=True)
class StepAdvance(Generic[S]):
    session: S


@dataclass(frozen=True, slots=True)
class StepFinish:
    pass


@dataclass(frozen=True, slots=True)
class StepAbort:
    """Normal early exit: nothing is released, the run still succeeds."""

    reason: str | None = None


StepOutcome = StepAdvance[S] | StepFinish | StepAbort
StepHandler = Callable[[S], Result[StepOutcome[S], ReleaseError]]
GetStep = Callable[[S], str]
Terminal = StepFinish | StepAbort


FINISH = StepFinish()


def advance(session: S) -> StepAdvance[S]:
    return StepAdvance(session=session)


def abort(reason: str | None = None) -> StepAbort:
    return StepAbort(reason=reason)


def run_state_machine(
    *,
    initial_state: S,
    get_step: GetStep[S],
    handlers: Mapping[str, StepHandler[S]],
) -> Result[Terminal, ReleaseError]:
    current = initial_state

    while True:
        step = get_step(current)
        handler = handlers.get(step)
        if handler is None:
            return Err(
                ReleaseError(
                    kind="invalid_input",
                    message=f"unknown release drafting step: {step}",
                )
            )

        outcome = handler(current)
        if isinstance(outcome, Err):
            return outcome

        match outcome.value:
            case StepAdvance(session=session):
                current = session
            case StepFinish() | StepAbort() as terminal:
                return Ok(terminal)
