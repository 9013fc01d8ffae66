"""High-level chess rules: legal moves, move application, game state."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import IntEnum

from gambit.core.board import Board
from gambit.core.cache import CacheInfo, StructuralCache
from gambit.core.enums import GameState, PieceKind, Player, SpecialMoveType
from gambit.core.errors import IllegalMoveError
from gambit.core.move import (
    CastlingMove,
    EnPassantMove,
    Move,
    PlainMove,
    PromotionMove,
    SpecialMove,
    is_special,
)
from gambit.core.move_generator import CASTLING_SAFE, MoveGenerator
from gambit.core.piece import Piece
from gambit.core.position import Position

_LOGGER = logging.getLogger(__name__)

# Draw offers become available once more than this many plies were played.
DRAW_OFFER_MIN_HISTORY = 30


class _QueryKind(IntEnum):
    MOVES = 0
    THREATS = 1


class RulesEngine:
    """Stateless rule checker operating on :class:`Board` snapshots.

    Every entry point treats its input board as read-only and returns new
    objects.  With ``caching=True`` move generation and threatened squares
    are memoised per structural board snapshot; the cache is unbounded and
    safe to share between threads.
    """

    __slots__ = ("_move_cache", "_threat_cache")

    def __init__(self, caching: bool = False) -> None:
        self._move_cache: StructuralCache[tuple[Move, ...]] | None = None
        self._threat_cache: StructuralCache[frozenset[Position]] | None = None
        if caching:
            self._move_cache = StructuralCache()
            self._threat_cache = StructuralCache()

    @property
    def is_caching(self) -> bool:
        return self._move_cache is not None

    def cache_info(self) -> dict[str, CacheInfo]:
        """Per-query cache counters; empty when caching is off."""
        if self._move_cache is None or self._threat_cache is None:
            return {}
        return {
            "moves": self._move_cache.info(),
            "threats": self._threat_cache.info(),
        }

    # -- Move generation ----------------------------------------------------

    def generate_moves(self, board: Board, player: Player | None = None) -> list[Move]:
        """All legal moves of *player* (default: the player to move).

        Protocol moves (resign, draw offer/answer) come first, followed by
        board moves in square order.
        """
        player = board.current_player if player is None else player
        if self._move_cache is None:
            return list(self._generate_moves(board, player))
        key = (board.snapshot(), player, _QueryKind.MOVES)
        return list(
            self._move_cache.get_or_create(key, lambda: self._generate_moves(board, player))
        )

    def _generate_moves(self, board: Board, player: Player) -> tuple[Move, ...]:
        last = board.last_move
        if isinstance(last, SpecialMove):
            if last.message in (SpecialMoveType.RESIGN, SpecialMoveType.DRAW_ACCEPT):
                return ()
            if last.message == SpecialMoveType.DRAW_OFFER:
                return (
                    SpecialMove(player, SpecialMoveType.DRAW_ACCEPT),
                    SpecialMove(player, SpecialMoveType.DRAW_DECLINE),
                )

        legal: list[Move] = [SpecialMove(player, SpecialMoveType.RESIGN)]
        if len(board.history) > DRAW_OFFER_MIN_HISTORY:
            legal.append(SpecialMove(player, SpecialMoveType.DRAW_OFFER))

        threatened_now: frozenset[Position] | None = None
        for move in MoveGenerator(board).pseudo_legal_moves(player):
            if isinstance(move, CastlingMove):
                if threatened_now is None:
                    threatened_now = self.get_threatened_positions(board, player)
                safe = CASTLING_SAFE[(player, move.castling_type)]
                if threatened_now.isdisjoint(safe):
                    legal.append(move)
                continue

            after = self.apply_move(board, move, validate=False)
            king_pos = after.find_king(player)
            if king_pos not in self.get_threatened_positions(after, player):
                legal.append(move)

        return tuple(legal)

    def get_threatened_positions(
        self, board: Board, threatened_player: Player
    ) -> frozenset[Position]:
        """Squares attacked by the opponent of *threatened_player*."""
        if self._threat_cache is None:
            return MoveGenerator(board).threatened_positions(threatened_player)
        key = (board.snapshot(), threatened_player, _QueryKind.THREATS)
        return self._threat_cache.get_or_create(
            key, lambda: MoveGenerator(board).threatened_positions(threatened_player)
        )

    def is_in_check(self, board: Board, player: Player) -> bool:
        return board.find_king(player) in self.get_threatened_positions(board, player)

    def find_legal(self, board: Board, move: Move) -> Move | None:
        """The generated legal move equal to *move*, or ``None`` when illegal.

        The generated instance carries full details (moving piece, capture
        flag) even when *move* was built from bare endpoints.
        """
        legal = self.generate_moves(board)
        try:
            return legal[legal.index(move)]
        except ValueError:
            return None

    def validate_move(self, board: Board, move: Move) -> bool:
        return self.find_legal(board, move) is not None

    # -- State transition ---------------------------------------------------

    def apply_move(self, board: Board, move: Move, validate: bool = True) -> Board:
        """Return the board after *move*; *board* itself is left untouched."""
        if validate:
            legal = self.find_legal(board, move)
            if legal is None:
                _LOGGER.debug("Rejected %s for %s", move, board.current_player)
                raise IllegalMoveError(move)
            move = legal

        result = board.clone()

        if not isinstance(move, SpecialMove):
            # The en passant window closes after one ply.
            for pos, piece in list(result.pieces(result.current_player.opponent)):
                if piece.is_en_passant_capturable:
                    result[pos] = piece.with_en_passant(False)

        if isinstance(move, SpecialMove):
            pass
        elif isinstance(move, CastlingMove):
            result.move(move.from_pos, move.to_pos)
            result.move(move.rook_from, move.rook_to)
            result[move.to_pos] = _require_piece(result, move.to_pos, move).with_moved()
            result[move.rook_to] = _require_piece(result, move.rook_to, move).with_moved()
        elif isinstance(move, EnPassantMove):
            result.move(move.from_pos, move.to_pos)
            result[move.capture_pos] = None
            result[move.to_pos] = _require_piece(result, move.to_pos, move).with_moved()
        elif isinstance(move, PromotionMove):
            result.move(move.from_pos, move.to_pos)
            landed = _require_piece(result, move.to_pos, move)
            result[move.to_pos] = Piece(move.promote_to, landed.owner, has_moved=True)
        elif isinstance(move, PlainMove):
            moving = _require_piece(result, move.from_pos, move)
            result.move(move.from_pos, move.to_pos)
            moved = moving.with_moved()
            if (
                moving.kind == PieceKind.PAWN
                and abs(move.from_pos.row - move.to_pos.row) == 2
                and move.from_pos.column == move.to_pos.column
            ):
                moved = moved.with_en_passant(True)
            result[move.to_pos] = moved
        else:
            raise TypeError(f"Not a move: {move!r}")

        result.toggle_player()
        result.record(move)
        return result

    def replay(self, moves: Iterable[Move], board: Board | None = None) -> Board:
        """Fold a recorded history through validated :meth:`apply_move`."""
        current = Board.initial() if board is None else board
        for move in moves:
            current = self.apply_move(current, move)
        return current

    # -- Game state ---------------------------------------------------------

    def get_game_state(self, board: Board, player: Player | None = None) -> GameState:
        """Classify *board*: decided by protocol moves, mate, stalemate or material."""
        player = board.current_player if player is None else player
        specials = [m for m in board.history if isinstance(m, SpecialMove)]

        for move in specials:
            if move.message == SpecialMoveType.RESIGN:
                return GameState.won_by(move.owner.opponent)

        if any(m.message == SpecialMoveType.DRAW_ACCEPT for m in specials):
            return GameState.DRAW

        # An offer that was neither accepted nor answered keeps the game going.
        if any(m.message == SpecialMoveType.DRAW_OFFER for m in specials):
            return GameState.IN_PROGRESS

        in_check = self.is_in_check(board, player)
        has_moves = any(not is_special(m) for m in self.generate_moves(board, player))

        if not has_moves:
            if in_check:
                return GameState.won_by(board.current_player.opponent)
            return GameState.DRAW  # stalemate

        if self.is_insufficient_material(board):
            return GameState.DRAW

        return GameState.IN_PROGRESS

    @staticmethod
    def is_insufficient_material(board: Board) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-colour bishops)."""
        occupied = list(board.pieces())
        total = len(occupied)

        # K vs K
        if total == 2:
            return True

        # K+minor vs K
        if total == 3:
            return any(
                piece.kind in (PieceKind.BISHOP, PieceKind.KNIGHT) for _, piece in occupied
            )

        # K+B vs K+B with same-colour bishops
        if total == 4:
            blacks = sum(1 for _, piece in occupied if piece.owner == Player.BLACK)
            bishops = [pos for pos, piece in occupied if piece.kind == PieceKind.BISHOP]
            return (
                blacks == 2
                and len(bishops) == 2
                and bishops[0].is_dark_square == bishops[1].is_dark_square
            )

        return False


def _require_piece(board: Board, pos: Position, move: Move) -> Piece:
    piece = board[pos]
    if piece is None:
        raise IllegalMoveError(move, f"No piece on {pos} for {move}")
    return piece


# -- Module-level convenience API -------------------------------------------

_DEFAULT_ENGINE = RulesEngine()


def generate_moves(board: Board, player: Player | None = None) -> list[Move]:
    return _DEFAULT_ENGINE.generate_moves(board, player)


def apply_move(board: Board, move: Move, validate: bool = True) -> Board:
    return _DEFAULT_ENGINE.apply_move(board, move, validate)


def get_game_state(board: Board, player: Player | None = None) -> GameState:
    return _DEFAULT_ENGINE.get_game_state(board, player)


def is_in_check(board: Board, player: Player) -> bool:
    return _DEFAULT_ENGINE.is_in_check(board, player)


def get_threatened_positions(board: Board, threatened_player: Player) -> frozenset[Position]:
    return _DEFAULT_ENGINE.get_threatened_positions(board, threatened_player)


def validate_move(board: Board, move: Move) -> bool:
    return _DEFAULT_ENGINE.validate_move(board, move)
