"""Adapters plugging the chess rules engine into the search strategies."""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import GameState, PieceKind, Player
from gambit.core.move import Move
from gambit.core.position import Position
from gambit.core.rules import RulesEngine

MATE_SCORE = 100_000

PIECE_VALUES: dict[PieceKind, int] = {
    PieceKind.PAWN: 100,
    PieceKind.KNIGHT: 320,
    PieceKind.BISHOP: 330,
    PieceKind.ROOK: 500,
    PieceKind.QUEEN: 900,
    PieceKind.KING: 0,
}


class ChessGenerator:
    """``Generator`` over :meth:`RulesEngine.generate_moves`."""

    __slots__ = ("_engine",)

    def __init__(self, engine: RulesEngine) -> None:
        self._engine = engine

    def generate(self, state: Board) -> list[Move]:
        return self._engine.generate_moves(state)


class ChessApplier:
    """``Applier`` over :meth:`RulesEngine.apply_move`.

    Moves come from the generator, so re-validation is skipped unless
    *validate* is set.
    """

    __slots__ = ("_engine", "_validate")

    def __init__(self, engine: RulesEngine, validate: bool = False) -> None:
        self._engine = engine
        self._validate = validate

    def apply(self, state: Board, move: Move) -> Board:
        return self._engine.apply_move(state, move, validate=self._validate)


class MaterialEvaluator:
    """Material balance from *player*'s point of view.

    Decided games score ``±MATE_SCORE`` (0 for draws) when *terminal_aware*
    is set, which costs a move generation per evaluated state.
    """

    __slots__ = ("_player", "_engine", "_terminal_aware")

    def __init__(
        self,
        player: Player,
        engine: RulesEngine | None = None,
        terminal_aware: bool = True,
    ) -> None:
        self._player = player
        self._engine = engine if engine is not None else RulesEngine()
        self._terminal_aware = terminal_aware

    @property
    def player(self) -> Player:
        return self._player

    def evaluate(self, state: Board) -> int:
        if self._terminal_aware:
            outcome = self._engine.get_game_state(state)
            if outcome == GameState.DRAW:
                return 0
            if outcome != GameState.IN_PROGRESS:
                won = outcome == GameState.won_by(self._player)
                return MATE_SCORE if won else -MATE_SCORE

        score = 0
        for pos, piece in state.pieces():
            value = self._piece_value(piece.kind, piece.owner, pos)
            score += value if piece.owner == self._player else -value
        return score

    def _piece_value(self, kind: PieceKind, owner: Player, pos: Position) -> int:
        return PIECE_VALUES[kind]


class PositionalEvaluator(MaterialEvaluator):
    """Material plus simple piece-square bonuses (centralisation, advancement)."""

    __slots__ = ()

    def _piece_value(self, kind: PieceKind, owner: Player, pos: Position) -> int:
        return PIECE_VALUES[kind] + piece_square_bonus(kind, owner, pos)


def piece_square_bonus(kind: PieceKind, owner: Player, pos: Position) -> int:
    col = pos.column_index
    rank = pos.row - 1
    if owner == Player.BLACK:
        rank = 7 - rank

    center_dist = abs(col - 3) + abs(rank - 3)

    if kind == PieceKind.PAWN:
        return rank * 12 - abs(col - 3) * 2
    if kind == PieceKind.KNIGHT:
        return 28 - center_dist * 8
    if kind == PieceKind.BISHOP:
        return 22 - center_dist * 5 + rank * 2
    if kind == PieceKind.ROOK:
        return 10 + rank * 3 - abs(col - 3)
    if kind == PieceKind.QUEEN:
        return 6 - center_dist * 2

    # King: favour safety on the back ranks.
    if rank <= 1:
        return 18 - abs(col - 4) * 2
    return -rank * 8
