"""gambit: chess rules engine with pluggable move selection strategies."""

from gambit.core import (
    Board,
    GameState,
    Player,
    RulesEngine,
    apply_move,
    create_initial_board,
    generate_moves,
    get_game_state,
    is_in_check,
)
from gambit.search import (
    AlphaBetaStrategy,
    ChessApplier,
    ChessGenerator,
    GreedyStrategy,
    MaterialEvaluator,
    RandomStrategy,
)

__version__ = "0.1.0"

__all__ = [
    "AlphaBetaStrategy",
    "Board",
    "ChessApplier",
    "ChessGenerator",
    "GameState",
    "GreedyStrategy",
    "MaterialEvaluator",
    "Player",
    "RandomStrategy",
    "RulesEngine",
    "apply_move",
    "create_initial_board",
    "generate_moves",
    "get_game_state",
    "is_in_check",
]
