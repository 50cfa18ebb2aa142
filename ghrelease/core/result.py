"""Ok/Err results.

Git calls, GitHub requests and editor runs return a Result instead of raising,
so the drafting state machine decides between "abort" and "fail" in one place.
Callers narrow with ``isinstance`` or ``match``:

    match next_version("v1.2.3"):
        case Ok(tag):
            console.print(tag)
        case Err(error):
            console.error(error.pretty())
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        return self


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Replace the error, typically to wrap it with the failed operation."""
        return Err(f(self.error))


Result: TypeAlias = Ok[T] | Err[E]
