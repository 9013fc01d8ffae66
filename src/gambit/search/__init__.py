"""Game-agnostic search strategies and their chess adapters.

The Qt worker lives in :mod:`gambit.search.qt_bridge` and is not imported
here, so headless users never load PyQt6.
"""

from gambit.search.adapters import (
    MATE_SCORE,
    PIECE_VALUES,
    ChessApplier,
    ChessGenerator,
    MaterialEvaluator,
    PositionalEvaluator,
)
from gambit.search.interfaces import (
    Applier,
    CancelCheck,
    Evaluator,
    Generator,
    SearchResult,
    Strategy,
)
from gambit.search.strategies import (
    DEFAULT_MAX_DEPTH,
    AlphaBetaStrategy,
    GreedyStrategy,
    RandomStrategy,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MATE_SCORE",
    "PIECE_VALUES",
    "AlphaBetaStrategy",
    "Applier",
    "CancelCheck",
    "ChessApplier",
    "ChessGenerator",
    "Evaluator",
    "Generator",
    "GreedyStrategy",
    "MaterialEvaluator",
    "PositionalEvaluator",
    "RandomStrategy",
    "SearchResult",
    "Strategy",
]
