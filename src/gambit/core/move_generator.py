"""Pseudo-legal move generation and threatened-square detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import CastlingType, PieceKind, Player
from gambit.core.move import (
    BoardMove,
    CastlingMove,
    EnPassantMove,
    PlainMove,
    PromotionMove,
)
from gambit.core.position import (
    ALL_POSITIONS,
    B1,
    B8,
    C1,
    C8,
    D1,
    D8,
    E1,
    E8,
    F1,
    F8,
    G1,
    G8,
    Position,
)

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.piece import Piece


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 2),
    (2, 1),
    (2, -1),
    (1, -2),
    (-1, -2),
    (-2, -1),
    (-2, 1),
    (-1, 2),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, 1),
    (0, -1),
    (1, 0),
    (-1, 0),
    (1, 1),
    (-1, 1),
    (1, -1),
    (-1, -1),
)

ROOK_DIRS: tuple[tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))
BISHOP_DIRS: tuple[tuple[int, int], ...] = ((1, 1), (-1, 1), (1, -1), (-1, -1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

PROMOTION_KINDS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)

# Squares that must be empty, and squares the king must not stand on or
# cross while threatened, per (player, side).
CASTLING_EMPTY: dict[tuple[Player, CastlingType], tuple[Position, ...]] = {
    (Player.WHITE, CastlingType.LONG): (B1, C1, D1),
    (Player.WHITE, CastlingType.SHORT): (F1, G1),
    (Player.BLACK, CastlingType.LONG): (B8, C8, D8),
    (Player.BLACK, CastlingType.SHORT): (F8, G8),
}
CASTLING_SAFE: dict[tuple[Player, CastlingType], tuple[Position, ...]] = {
    (Player.WHITE, CastlingType.LONG): (E1, D1, C1),
    (Player.WHITE, CastlingType.SHORT): (E1, F1, G1),
    (Player.BLACK, CastlingType.LONG): (E8, D8, C8),
    (Player.BLACK, CastlingType.SHORT): (E8, F8, G8),
}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Position, ...], ...]:
    targets: list[tuple[Position, ...]] = []
    for pos in ALL_POSITIONS:
        moves = [pos.offset(dc, dr) for dc, dr in offsets]
        targets.append(tuple(p for p in moves if p is not None))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Position, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Position, ...], ...]] = []
    for pos in ALL_POSITIONS:
        square_rays: list[tuple[Position, ...]] = []
        for dc, dr in directions:
            ray: list[Position] = []
            step = pos.offset(dc, dr)
            while step is not None:
                ray.append(step)
                step = step.offset(dc, dr)
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_ROOK_RAYS = _build_rays(ROOK_DIRS)
_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDING_RAYS = {
    PieceKind.ROOK: _ROOK_RAYS,
    PieceKind.BISHOP: _BISHOP_RAYS,
    PieceKind.QUEEN: _QUEEN_RAYS,
}


class MoveGenerator:
    """Generates pseudo-legal moves and attack reach for a :class:`Board`.

    Pseudo-legal moves follow the piece movement patterns and board
    occupancy only; whether they expose the mover's own king is decided
    by :class:`gambit.core.rules.RulesEngine`.  The generator never
    mutates the board it reads.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(self, player: Player) -> list[BoardMove]:
        """All pseudo-legal board moves of *player*, castling candidates included."""
        moves: list[BoardMove] = []
        for pos, piece in self._board.pieces(player):
            self._gen_piece(pos, piece, moves, threats_only=False)
            if piece.kind == PieceKind.KING:
                self._gen_castling(pos, piece, moves)
        return moves

    def threatened_positions(self, threatened_player: Player) -> frozenset[Position]:
        """Squares the opponent of *threatened_player* attacks or controls."""
        attacker = threatened_player.opponent
        moves: list[BoardMove] = []
        for pos, piece in self._board.pieces(attacker):
            self._gen_piece(pos, piece, moves, threats_only=True)
        return frozenset(m.to_pos for m in moves)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_piece(
        self,
        pos: Position,
        piece: Piece,
        moves: list[BoardMove],
        threats_only: bool,
    ) -> None:
        kind = piece.kind
        if kind == PieceKind.PAWN:
            self._gen_pawn(pos, piece, moves, threats_only)
        elif kind == PieceKind.KNIGHT:
            self._gen_step(pos, piece, _KNIGHT_TARGETS[pos.index], moves)
        elif kind == PieceKind.KING:
            self._gen_step(pos, piece, _KING_TARGETS[pos.index], moves)
        else:
            self._gen_sliding(pos, piece, _SLIDING_RAYS[kind][pos.index], moves)

    def _gen_step(
        self,
        pos: Position,
        piece: Piece,
        targets: tuple[Position, ...],
        moves: list[BoardMove],
    ) -> None:
        board = self._board
        for to_pos in targets:
            target = board[to_pos]
            if target is None:
                moves.append(PlainMove(piece, pos, to_pos))
            elif target.owner != piece.owner:
                moves.append(PlainMove(piece, pos, to_pos, is_capture=True))

    def _gen_sliding(
        self,
        pos: Position,
        piece: Piece,
        rays: tuple[tuple[Position, ...], ...],
        moves: list[BoardMove],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_pos in ray:
                target = board[to_pos]
                if target is None:
                    moves.append(PlainMove(piece, pos, to_pos))
                    continue
                if target.owner != piece.owner:
                    moves.append(PlainMove(piece, pos, to_pos, is_capture=True))
                break

    def _gen_pawn(
        self,
        pos: Position,
        piece: Piece,
        moves: list[BoardMove],
        threats_only: bool,
    ) -> None:
        board = self._board
        owner = piece.owner
        forward = 1 if owner == Player.WHITE else -1
        home_row = 2 if owner == Player.WHITE else 7
        last_row = 8 if owner == Player.WHITE else 1

        if not threats_only:
            one_step = pos.offset(0, forward)
            if one_step is not None and board.is_empty(one_step):
                if one_step.row == last_row:
                    self._add_promotions(owner, pos, one_step, moves)
                else:
                    moves.append(PlainMove(piece, pos, one_step))
                    two_step = pos.offset(0, 2 * forward)
                    if (
                        not piece.has_moved
                        and pos.row == home_row
                        and two_step is not None
                        and board.is_empty(two_step)
                    ):
                        moves.append(PlainMove(piece, pos, two_step))

        for side in (1, -1):
            cap_pos = pos.offset(side, forward)
            if cap_pos is None:
                continue
            target = board[cap_pos]

            # Threat queries reuse the capture rules: only enemy-occupied
            # diagonals and en passant targets count.
            if target is not None:
                if target.owner == owner:
                    continue
                if cap_pos.row == last_row:
                    self._add_promotions(owner, pos, cap_pos, moves)
                else:
                    moves.append(PlainMove(piece, pos, cap_pos, is_capture=True))
                continue

            beside = pos.offset(side, 0)
            victim = board[beside] if beside is not None else None
            if (
                victim is not None
                and victim.owner != owner
                and victim.kind == PieceKind.PAWN
                and victim.is_en_passant_capturable
            ):
                moves.append(EnPassantMove(owner, pos, cap_pos, beside))

    @staticmethod
    def _add_promotions(
        owner: Player,
        from_pos: Position,
        to_pos: Position,
        moves: list[BoardMove],
    ) -> None:
        for kind in PROMOTION_KINDS:
            moves.append(PromotionMove(owner, from_pos, to_pos, kind))

    def _gen_castling(self, king_pos: Position, king: Piece, moves: list[BoardMove]) -> None:
        """Castling candidates: unmoved king and rook, empty squares between.

        Threat checks are left to the rules engine.
        """
        if king.has_moved:
            return

        board = self._board
        owner = king.owner
        for castling_type in (CastlingType.LONG, CastlingType.SHORT):
            candidate = CastlingMove(owner, castling_type)
            if king_pos != candidate.from_pos:
                continue
            rook = board[candidate.rook_from]
            if (
                rook is None
                or rook.kind != PieceKind.ROOK
                or rook.owner != owner
                or rook.has_moved
            ):
                continue
            if all(board[sq] is None for sq in CASTLING_EMPTY[(owner, castling_type)]):
                moves.append(candidate)
