"""Core domain layer: chess rules with zero external dependencies.

Quick start::

    from gambit.core import RulesEngine, create_initial_board

    engine = RulesEngine()
    board = create_initial_board()
    for move in engine.generate_moves(board):
        print(move)
"""

from gambit.core.board import Board, create_initial_board
from gambit.core.cache import CacheInfo, StructuralCache
from gambit.core.enums import (
    CastlingType,
    GameState,
    PieceKind,
    Player,
    SpecialMoveType,
)
from gambit.core.errors import (
    AmbiguousStateError,
    GambitError,
    IllegalMoveError,
    InvalidConfigurationError,
    OutOfRangeError,
)
from gambit.core.move import (
    BoardMove,
    CastlingMove,
    EnPassantMove,
    Move,
    PlainMove,
    PromotionMove,
    SpecialMove,
    is_special,
    move_from_dict,
    move_to_dict,
)
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import STARTING_FEN, board_from_fen, board_to_fen, find_move
from gambit.core.piece import Piece
from gambit.core.position import ALL_POSITIONS, Position
from gambit.core.rules import (
    RulesEngine,
    apply_move,
    generate_moves,
    get_game_state,
    get_threatened_positions,
    is_in_check,
    validate_move,
)

__all__ = [
    # Enums
    "CastlingType",
    "GameState",
    "PieceKind",
    "Player",
    "SpecialMoveType",
    # Errors
    "AmbiguousStateError",
    "GambitError",
    "IllegalMoveError",
    "InvalidConfigurationError",
    "OutOfRangeError",
    # Domain objects
    "ALL_POSITIONS",
    "Board",
    "BoardMove",
    "CacheInfo",
    "CastlingMove",
    "EnPassantMove",
    "Move",
    "MoveGenerator",
    "Piece",
    "PlainMove",
    "Position",
    "PromotionMove",
    "RulesEngine",
    "SpecialMove",
    "StructuralCache",
    # Operations
    "apply_move",
    "create_initial_board",
    "generate_moves",
    "get_game_state",
    "get_threatened_positions",
    "is_in_check",
    "is_special",
    "validate_move",
    "move_from_dict",
    "move_to_dict",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "find_move",
]
