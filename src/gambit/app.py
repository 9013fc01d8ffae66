"""Offline match runner: pit two strategies against each other."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from gambit.core.board import Board, create_initial_board
from gambit.core.enums import GameState, Player
from gambit.core.errors import GambitError
from gambit.core.move import Move
from gambit.core.rules import RulesEngine
from gambit.search.adapters import ChessApplier, ChessGenerator, MaterialEvaluator
from gambit.search.interfaces import Strategy
from gambit.search.strategies import AlphaBetaStrategy, GreedyStrategy, RandomStrategy

_LOGGER = logging.getLogger(__name__)

STRATEGY_NAMES = ("random", "greedy", "alphabeta")


@dataclass(frozen=True, slots=True)
class MatchConfig:
    """Options of one offline match."""

    white: str = "alphabeta"
    black: str = "random"
    depth: int = 2
    max_plies: int = 200
    seed: int | None = None
    verbose: bool = False


@dataclass(frozen=True, slots=True)
class MatchOutcome:
    board: Board
    state: GameState

    @property
    def plies(self) -> int:
        return len(self.board.history)


def build_strategy(
    name: str,
    player: Player,
    engine: RulesEngine,
    *,
    depth: int = 2,
    rng: random.Random | None = None,
) -> Strategy[Board, Move]:
    """Create the named strategy playing *player*'s side."""
    generator = ChessGenerator(engine)
    applier = ChessApplier(engine)
    if name == "random":
        return RandomStrategy(generator, rng)
    if name == "greedy":
        # Greedy keeps the successor that looks worst for the opponent.
        return GreedyStrategy(MaterialEvaluator(player.opponent, engine), generator, applier)
    if name == "alphabeta":
        return AlphaBetaStrategy(MaterialEvaluator(player, engine), generator, applier, depth)
    raise ValueError(f"Unknown strategy: {name!r}")


def play_match(
    config: MatchConfig,
    on_move: Callable[[int, Player, Move], None] | None = None,
) -> MatchOutcome:
    """Play from the initial board until the game ends or *max_plies* pass."""
    engine = RulesEngine(caching=True)
    rng = random.Random(config.seed)
    strategies = {
        Player.WHITE: build_strategy(config.white, Player.WHITE, engine, depth=config.depth, rng=rng),
        Player.BLACK: build_strategy(config.black, Player.BLACK, engine, depth=config.depth, rng=rng),
    }

    board = create_initial_board()
    state = engine.get_game_state(board)
    while state == GameState.IN_PROGRESS and len(board.history) < config.max_plies:
        player = board.current_player
        move = strategies[player].select(board)
        if move is None:
            break
        board = engine.apply_move(board, move)
        if on_move is not None:
            on_move(len(board.history), player, move)
        state = engine.get_game_state(board)

    _LOGGER.debug("Match finished after %d plies: %s (%s)", len(board.history), state.name, engine.cache_info())
    return MatchOutcome(board, state)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gambit-match",
        description="Play an offline chess match between two strategies.",
    )
    parser.add_argument("--white", choices=STRATEGY_NAMES, default="alphabeta")
    parser.add_argument("--black", choices=STRATEGY_NAMES, default="random")
    parser.add_argument("--depth", type=int, default=2, help="alpha-beta search depth")
    parser.add_argument("--max-plies", type=int, default=200, help="stop after this many plies")
    parser.add_argument("--seed", type=int, default=None, help="seed for random strategies")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run one match and print its moves and result."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    config = MatchConfig(
        white=args.white,
        black=args.black,
        depth=args.depth,
        max_plies=args.max_plies,
        seed=args.seed,
        verbose=args.verbose,
    )

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    def _print_move(ply: int, player: Player, move: Move) -> None:
        print(f"{ply:4d}. {player}: {move}")

    try:
        outcome = play_match(config, _print_move)
    except GambitError as exc:
        parser.error(str(exc))

    print(f"Result: {outcome.state.name} after {outcome.plies} plies")
    return 0


if __name__ == "__main__":
    sys.exit(main())
