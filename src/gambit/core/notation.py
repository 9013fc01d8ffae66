"""FEN parsing/serialisation and textual move lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.board import Board
from gambit.core.enums import CastlingType, PieceKind, Player
from gambit.core.errors import IllegalMoveError, OutOfRangeError
from gambit.core.move import CastlingMove, Move, PromotionMove, SpecialMove
from gambit.core.piece import Piece
from gambit.core.position import Position

if TYPE_CHECKING:
    from gambit.core.rules import RulesEngine

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, tuple[Player, CastlingType]] = {
    "K": (Player.WHITE, CastlingType.SHORT),
    "Q": (Player.WHITE, CastlingType.LONG),
    "k": (Player.BLACK, CastlingType.SHORT),
    "q": (Player.BLACK, CastlingType.LONG),
}
_HOME_PAWN_ROW = {Player.WHITE: 2, Player.BLACK: 7}


def board_from_fen(fen: str) -> Board:
    """Parse a FEN string into a :class:`Board` with an empty history.

    FEN carries no per-piece move flags, so they are reconstructed:
    castling rights mark the matching king and rook as unmoved, pawns on
    their home row are unmoved, and the en passant field flags the pawn
    that just advanced two squares.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Side to move
    if side_part == "w":
        side = Player.WHITE
    elif side_part == "b":
        side = Player.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 2. Castling
    rights: set[tuple[Player, CastlingType]] = set()
    if castling_part != "-":
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or right in rights:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            rights.add(right)
    unmoved: set[Position] = set()
    for owner, castling_type in rights:
        candidate = CastlingMove(owner, castling_type)
        unmoved.add(candidate.from_pos)
        unmoved.add(candidate.rook_from)

    # 3. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board(side)
    for rank_idx, rank_text in enumerate(ranks):
        row = 8 - rank_idx
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                pos = Position("ABCDEFGH"[col], row)
                piece = Piece.from_char(ch)
                board[pos] = Piece(
                    piece.kind, piece.owner, has_moved=_has_moved(piece, pos, unmoved)
                )
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    for owner, castling_type in rights:
        candidate = CastlingMove(owner, castling_type)
        king = board[candidate.from_pos]
        rook = board[candidate.rook_from]
        if (
            king is None
            or king.kind != PieceKind.KING
            or rook is None
            or rook.kind != PieceKind.ROOK
            or king.owner != owner
            or rook.owner != owner
        ):
            raise ValueError(f"Invalid FEN castling field: {castling_part!r}")

    # 4. En passant
    if ep_part != "-":
        try:
            target = Position.parse(ep_part)
        except OutOfRangeError:
            raise ValueError(f"Invalid FEN en-passant square: {ep_part!r}") from None
        expected_row = 6 if side == Player.WHITE else 3
        if target.row != expected_row:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        pawn_pos = target.south() if side == Player.WHITE else target.north()
        pawn = board[pawn_pos] if pawn_pos is not None else None
        if pawn is None or pawn.kind != PieceKind.PAWN or pawn.owner == side:
            raise ValueError(f"No pawn to capture en passant: {ep_part!r}")
        board[pawn_pos] = pawn.with_en_passant(True)

    return board


def _has_moved(piece: Piece, pos: Position, unmoved: set[Position]) -> bool:
    if piece.kind in (PieceKind.KING, PieceKind.ROOK):
        return pos not in unmoved
    if piece.kind == PieceKind.PAWN:
        return pos.row != _HOME_PAWN_ROW[piece.owner]
    return False


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    # 1. Board
    rows: list[str] = []
    for row in range(8, 0, -1):
        empty = 0
        text = ""
        for col in "ABCDEFGH":
            piece = board[Position(col, row)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if board.current_player == Player.WHITE else "b"

    # 3. Castling
    castling_str = ""
    for ch, (owner, castling_type) in _CASTLING_CHARS.items():
        candidate = CastlingMove(owner, castling_type)
        king = board[candidate.from_pos]
        rook = board[candidate.rook_from]
        if (
            king is not None
            and king.kind == PieceKind.KING
            and king.owner == owner
            and not king.has_moved
            and rook is not None
            and rook.kind == PieceKind.ROOK
            and rook.owner == owner
            and not rook.has_moved
        ):
            castling_str += ch
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = "-"
    for pos, piece in board.pieces(board.current_player.opponent):
        if piece.is_en_passant_capturable:
            behind = pos.south() if piece.owner == Player.WHITE else pos.north()
            if behind is not None:
                ep_str = str(behind).lower()
            break

    fullmove = len(board.history) // 2 + 1
    return f"{board_str} {side_str} {castling_str} {ep_str} 0 {fullmove}"


def find_move(board: Board, text: str, engine: RulesEngine | None = None) -> Move:
    """Resolve *text* against the legal moves of *board*.

    Accepts the rendered form of a move (``'PE2E4'``, ``'NG1F3'``,
    ``'O-O'``, ``'E7E8=Q'``, ``'resign'``) or bare endpoints (``'e2e4'``).
    """
    if engine is None:
        from gambit.core.rules import RulesEngine

        engine = RulesEngine()

    wanted = text.strip().upper()
    legal = engine.generate_moves(board)
    for move in legal:
        if str(move).upper() == wanted:
            return move

    for move in legal:
        if isinstance(move, (SpecialMove, CastlingMove, PromotionMove)):
            continue
        if f"{move.from_pos}{move.to_pos}" == wanted:
            return move

    raise IllegalMoveError(text, f"No legal move matches {text!r}")
