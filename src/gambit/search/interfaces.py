"""Capabilities a state/move pair must supply to be searched."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol, TypeVar

S = TypeVar("S")
M = TypeVar("M")
S_contra = TypeVar("S_contra", contravariant=True)
M_co = TypeVar("M_co", covariant=True)

CancelCheck = Callable[[], bool]


class Evaluator(Protocol[S_contra]):
    """Scores a state; higher is better for the side the evaluator serves."""

    def evaluate(self, state: S_contra) -> int: ...


class Generator(Protocol[S_contra, M_co]):
    """Lists the legal transitions out of a state (empty when terminal)."""

    def generate(self, state: S_contra) -> Sequence[M_co]: ...


class Applier(Protocol[S, M]):
    """Produces the state reached by playing a move; never mutates its input."""

    def apply(self, state: S, move: M) -> S: ...


class Strategy(Protocol[S, M]):
    """Move selection policy; ``None`` means the state is terminal."""

    def select(self, state: S) -> M | None: ...


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Outcome of the most recent search of a strategy."""

    best_move: object | None
    score: int | None
    depth: int
    nodes: int
