"""Tests for the generic search strategies on toy game trees."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

import pytest

from gambit.core.errors import InvalidConfigurationError
from gambit.search.interfaces import SearchResult
from gambit.search.strategies import (
    DEFAULT_MAX_DEPTH,
    AlphaBetaStrategy,
    GreedyStrategy,
    RandomStrategy,
)


@dataclass(eq=False)
class Node:
    """Toy game state: a static score and labelled children."""

    value: int
    children: dict[str, Node] = field(default_factory=dict)


class TreeGame:
    """Evaluator, generator and applier over :class:`Node` trees."""

    def __init__(self) -> None:
        self.evaluations = 0

    def evaluate(self, state: Node) -> int:
        self.evaluations += 1
        return state.value

    def generate(self, state: Node) -> list[str]:
        return list(state.children)

    def apply(self, state: Node, move: str) -> Node:
        return state.children[move]


def _leaf(value: int) -> Node:
    return Node(value)


def _random_tree(rng: random.Random, depth: int, branching: int) -> Node:
    node = Node(rng.randint(-50, 50))
    if depth == 0:
        return node
    for idx in range(rng.randint(0, branching)):
        node.children[f"m{idx}"] = _random_tree(rng, depth - 1, branching)
    return node


def _minimax(game: TreeGame, state: Node, depth: int, max_depth: int, maximizing: bool) -> int:
    if depth == max_depth or not state.children:
        return state.value
    scores = [
        _minimax(game, child, depth + 1, max_depth, not maximizing)
        for child in state.children.values()
    ]
    return max(scores) if maximizing else min(scores)


def _reference(game: TreeGame, root: Node, max_depth: int, maximize_root: bool):
    best_move, best_score = None, None
    for move, child in root.children.items():
        score = _minimax(game, child, 1, max_depth, not maximize_root)
        if best_score is None or score > best_score:
            best_move, best_score = move, score
    return best_move, best_score


class TestRandomStrategy:
    def test_terminal_returns_none(self) -> None:
        strategy = RandomStrategy(TreeGame())
        assert strategy.select(_leaf(3)) is None

    def test_picks_a_legal_move(self) -> None:
        root = Node(0, {"a": _leaf(1), "b": _leaf(2), "c": _leaf(3)})
        strategy = RandomStrategy(TreeGame(), random.Random(5))
        for _ in range(20):
            assert strategy.select(root) in root.children

    def test_seeded_is_reproducible(self) -> None:
        root = Node(0, {str(i): _leaf(i) for i in range(10)})
        first = RandomStrategy(TreeGame(), random.Random(1234))
        second = RandomStrategy(TreeGame(), random.Random(1234))
        assert [first.select(root) for _ in range(10)] == [second.select(root) for _ in range(10)]


class TestGreedyStrategy:
    def test_picks_minimum(self) -> None:
        game = TreeGame()
        root = Node(0, {"a": _leaf(5), "b": _leaf(-2), "c": _leaf(7)})
        assert GreedyStrategy(game, game, game).select(root) == "b"

    def test_tie_goes_to_first(self) -> None:
        game = TreeGame()
        root = Node(0, {"a": _leaf(4), "b": _leaf(1), "c": _leaf(1)})
        assert GreedyStrategy(game, game, game).select(root) == "b"

    def test_terminal_returns_none(self) -> None:
        game = TreeGame()
        assert GreedyStrategy(game, game, game).select(_leaf(0)) is None

    def test_single_move(self) -> None:
        game = TreeGame()
        assert GreedyStrategy(game, game, game).select(Node(0, {"only": _leaf(9)})) == "only"


class TestAlphaBetaConfiguration:
    def test_default_depth(self) -> None:
        game = TreeGame()
        assert AlphaBetaStrategy(game, game, game).max_depth == DEFAULT_MAX_DEPTH

    @pytest.mark.parametrize("depth", [0, -1])
    def test_rejects_depth_below_one(self, depth: int) -> None:
        game = TreeGame()
        with pytest.raises(InvalidConfigurationError):
            AlphaBetaStrategy(game, game, game, max_depth=depth)

    def test_setter_validates(self) -> None:
        game = TreeGame()
        strategy = AlphaBetaStrategy(game, game, game)
        strategy.max_depth = 5
        assert strategy.max_depth == 5
        with pytest.raises(ValueError):
            strategy.max_depth = 0
        assert strategy.max_depth == 5


class TestAlphaBetaSearch:
    def test_terminal_returns_none(self) -> None:
        game = TreeGame()
        strategy = AlphaBetaStrategy(game, game, game)
        assert strategy.select(_leaf(0)) is None
        assert strategy.last_result == SearchResult(None, None, DEFAULT_MAX_DEPTH, 0)

    def test_depth_one_maximises_children(self) -> None:
        game = TreeGame()
        root = Node(0, {"a": _leaf(3), "b": _leaf(8), "c": _leaf(8)})
        strategy = AlphaBetaStrategy(game, game, game, max_depth=1)
        assert strategy.select(root) == "b"
        assert strategy.last_result.score == 8

    def test_opponent_minimises(self) -> None:
        game = TreeGame()
        root = Node(
            0,
            {
                "greedy": Node(0, {"x": _leaf(100), "y": _leaf(-100)}),
                "safe": Node(0, {"x": _leaf(5), "y": _leaf(4)}),
            },
        )
        strategy = AlphaBetaStrategy(game, game, game, max_depth=2)
        assert strategy.select(root) == "safe"
        assert strategy.last_result.score == 4

    def test_maximize_root_false_flips_reply_level(self) -> None:
        game = TreeGame()
        root = Node(
            0,
            {
                "greedy": Node(0, {"x": _leaf(100), "y": _leaf(-100)}),
                "safe": Node(0, {"x": _leaf(5), "y": _leaf(4)}),
            },
        )
        strategy = AlphaBetaStrategy(game, game, game, max_depth=2)
        assert strategy.select(root, maximize_root=False) == "greedy"

    def test_terminal_inner_node_is_evaluated(self) -> None:
        game = TreeGame()
        root = Node(0, {"mate": _leaf(50), "play": Node(0, {"x": _leaf(10)})})
        strategy = AlphaBetaStrategy(game, game, game, max_depth=3)
        assert strategy.select(root) == "mate"

    def test_pruning_skips_nodes(self) -> None:
        game = TreeGame()
        reply = Node(
            0,
            {
                "p": Node(0, {"x": _leaf(3), "y": _leaf(5)}),
                "q": Node(0, {"x": _leaf(6), "y": _leaf(1)}),
            },
        )
        strategy = AlphaBetaStrategy(game, game, game, max_depth=3)
        assert strategy.select(Node(0, {"a": reply})) == "a"
        assert strategy.last_result.score == 5
        # q is refuted by its first leaf; q.y is never evaluated.
        assert game.evaluations == 3

    @pytest.mark.parametrize("seed", range(25))
    @pytest.mark.parametrize("maximize_root", [True, False])
    def test_matches_exhaustive_minimax(self, seed: int, maximize_root: bool) -> None:
        rng = random.Random(seed)
        root = _random_tree(rng, depth=4, branching=4)
        root.children.setdefault("m0", _random_tree(rng, 3, 3))
        max_depth = rng.randint(1, 4)
        game = TreeGame()

        strategy = AlphaBetaStrategy(game, game, game, max_depth=max_depth)
        move = strategy.select(root, maximize_root=maximize_root)

        expected_move, expected_score = _reference(game, root, max_depth, maximize_root)
        assert move == expected_move
        assert strategy.last_result is not None
        assert strategy.last_result.score == expected_score

    def test_scores_are_integers(self) -> None:
        game = TreeGame()
        root = Node(0, {"a": Node(0, {"x": _leaf(1)})})
        strategy = AlphaBetaStrategy(game, game, game, max_depth=2)
        strategy.select(root)
        assert isinstance(strategy.last_result.score, int)
        assert not math.isinf(strategy.last_result.score)


class TestAlphaBetaCancellation:
    def test_cancelled_before_first_node(self) -> None:
        game = TreeGame()
        root = Node(0, {"a": _leaf(3), "b": _leaf(8)})
        strategy = AlphaBetaStrategy(game, game, game, max_depth=1)
        assert strategy.select(root, is_cancelled=lambda: True) is None
        assert strategy.last_result == SearchResult(None, None, 1, 0)
        assert game.evaluations == 0

    def test_keeps_best_completed_root_move(self) -> None:
        game = TreeGame()
        root = Node(0, {"a": _leaf(3), "b": _leaf(8)})
        strategy = AlphaBetaStrategy(game, game, game, max_depth=1)
        polls: list[int] = []

        def cancel_after_first_node() -> bool:
            polls.append(1)
            return len(polls) > 1

        assert strategy.select(root, is_cancelled=cancel_after_first_node) == "a"
        assert strategy.last_result == SearchResult("a", 3, 1, 1)

    def test_cancel_check_does_not_leak_into_next_search(self) -> None:
        game = TreeGame()
        root = Node(0, {"a": _leaf(3), "b": _leaf(8)})
        strategy = AlphaBetaStrategy(game, game, game, max_depth=1)
        strategy.select(root, is_cancelled=lambda: True)
        assert strategy.select(root) == "b"
        assert strategy.last_result.nodes == 2
