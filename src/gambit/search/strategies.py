"""Move selection strategies: random, one-ply greedy, alpha-beta minimax."""

from __future__ import annotations

import logging
import math
import random
from typing import Generic, TypeVar

from gambit.core.errors import InvalidConfigurationError
from gambit.search.interfaces import (
    Applier,
    CancelCheck,
    Evaluator,
    Generator,
    SearchResult,
)

_LOGGER = logging.getLogger(__name__)

S = TypeVar("S")
M = TypeVar("M")

DEFAULT_MAX_DEPTH = 3


class RandomStrategy(Generic[S, M]):
    """Picks a legal move uniformly at random.

    The random source is injected so a seeded ``random.Random`` makes the
    choice reproducible.
    """

    __slots__ = ("_generator", "_rng")

    def __init__(
        self,
        generator: Generator[S, M],
        rng: random.Random | None = None,
    ) -> None:
        self._generator = generator
        self._rng = rng if rng is not None else random.Random()

    def select(self, state: S) -> M | None:
        moves = list(self._generator.generate(state))
        if not moves:
            return None
        return self._rng.choice(moves)


class GreedyStrategy(Generic[S, M]):
    """One-ply search choosing the move whose successor scores *lowest*.

    This minimises, not maximises, the evaluator: pair it with an evaluator
    that scores states from the opponent's side.  Ties go to the first move
    generated.
    """

    __slots__ = ("_evaluator", "_generator", "_applier")

    def __init__(
        self,
        evaluator: Evaluator[S],
        generator: Generator[S, M],
        applier: Applier[S, M],
    ) -> None:
        self._evaluator = evaluator
        self._generator = generator
        self._applier = applier

    def select(self, state: S) -> M | None:
        best_move: M | None = None
        best_score = math.inf
        for move in self._generator.generate(state):
            score = self._evaluator.evaluate(self._applier.apply(state, move))
            if score < best_score:
                best_score = score
                best_move = move
        return best_move


class _SearchCancelled(Exception):
    pass


def _never_cancelled() -> bool:
    return False


class AlphaBetaStrategy(Generic[S, M]):
    """Bounded-depth minimax with alpha-beta pruning.

    The root always takes the child with the highest score; *maximize_root*
    only decides whether the level below the root maximises or minimises.
    Leaves (``depth == max_depth`` or no moves) are scored by the evaluator.
    Pruning changes the node count, never the selected move or its score.

    *is_cancelled* is polled once per node; when it fires the best root
    move found so far is returned.
    """

    __slots__ = (
        "_evaluator",
        "_generator",
        "_applier",
        "_max_depth",
        "_nodes",
        "_cancel_check",
        "last_result",
    )

    def __init__(
        self,
        evaluator: Evaluator[S],
        generator: Generator[S, M],
        applier: Applier[S, M],
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._evaluator = evaluator
        self._generator = generator
        self._applier = applier
        self._max_depth = DEFAULT_MAX_DEPTH
        self._nodes = 0
        self._cancel_check: CancelCheck = _never_cancelled
        self.max_depth = max_depth
        self.last_result: SearchResult | None = None

    @property
    def max_depth(self) -> int:
        """Number of transitions explored below the current state."""
        return self._max_depth

    @max_depth.setter
    def max_depth(self, value: int) -> None:
        if value < 1:
            raise InvalidConfigurationError(f"Search depth must be >= 1, got {value}")
        self._max_depth = value

    def select(
        self,
        state: S,
        maximize_root: bool = True,
        is_cancelled: CancelCheck | None = None,
    ) -> M | None:
        self._nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled
        best_move: M | None = None
        best_score: int | None = None

        try:
            for move in self._generator.generate(state):
                score = self._score(
                    self._applier.apply(state, move),
                    1,
                    -math.inf,
                    math.inf,
                    not maximize_root,
                )
                if best_score is None or score > best_score:
                    best_score = score
                    best_move = move
        except _SearchCancelled:
            _LOGGER.debug("Alpha-beta cancelled after %d nodes", self._nodes)
        finally:
            self._cancel_check = _never_cancelled

        self.last_result = SearchResult(best_move, best_score, self._max_depth, self._nodes)
        _LOGGER.debug(
            "Alpha-beta depth %d picked %s (score %s, %d nodes)",
            self._max_depth,
            best_move,
            best_score,
            self._nodes,
        )
        return best_move

    def _score(
        self,
        state: S,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
    ) -> int:
        if self._cancel_check():
            raise _SearchCancelled
        self._nodes += 1
        if depth == self._max_depth:
            return self._evaluator.evaluate(state)

        moves = self._generator.generate(state)
        if not moves:
            return self._evaluator.evaluate(state)

        if maximizing:
            value = -math.inf
            for move in moves:
                child = self._applier.apply(state, move)
                value = max(value, self._score(child, depth + 1, alpha, beta, False))
                alpha = max(alpha, value)
                if alpha >= beta:
                    break
        else:
            value = math.inf
            for move in moves:
                child = self._applier.apply(state, move)
                value = min(value, self._score(child, depth + 1, alpha, beta, True))
                beta = min(beta, value)
                if alpha >= beta:
                    break
        return int(value)
