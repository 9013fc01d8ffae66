"""Board - piece placement, side to move and move history."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from gambit.core.enums import PieceKind, Player
from gambit.core.errors import AmbiguousStateError
from gambit.core.piece import Piece
from gambit.core.position import ALL_POSITIONS, Position, to_position

if TYPE_CHECKING:
    from gambit.core.move import Move

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)

BoardSnapshot = tuple[tuple[Piece | None, ...], Player, tuple["Move", ...]]


class Board:
    """64-square board with the player to move and an append-only history.

    The board is mutable so the engine can work on private copies, but a
    board handed out by the engine is never mutated afterwards.
    """

    __slots__ = ("_squares", "current_player", "_history")

    def __init__(
        self,
        current_player: Player = Player.WHITE,
        history: list[Move] | None = None,
    ) -> None:
        self._squares: list[Piece | None] = [None] * 64
        self.current_player = current_player
        self._history: list[Move] = list(history) if history else []

    # -- Element access -----------------------------------------------------

    def __getitem__(self, key: Position | str | int) -> Piece | None:
        return self._squares[to_position(key).index]

    def __setitem__(self, key: Position | str | int, piece: Piece | None) -> None:
        self._squares[to_position(key).index] = piece

    def is_empty(self, pos: Position) -> bool:
        return self._squares[pos.index] is None

    def __iter__(self) -> Iterator[tuple[Position, Piece | None]]:
        return zip(ALL_POSITIONS, self._squares)

    # -- History ------------------------------------------------------------

    @property
    def history(self) -> tuple[Move, ...]:
        """Moves played so far, oldest first."""
        return tuple(self._history)

    @property
    def last_move(self) -> Move | None:
        return self._history[-1] if self._history else None

    def record(self, move: Move) -> None:
        """Append *move* to the history."""
        self._history.append(move)

    # -- Query helpers ------------------------------------------------------

    def pieces(self, player: Player | None = None) -> Iterator[tuple[Position, Piece]]:
        """Occupied squares, optionally restricted to *player*'s pieces."""
        for pos, piece in zip(ALL_POSITIONS, self._squares):
            if piece is None:
                continue
            if player is None or piece.owner == player:
                yield pos, piece

    def piece_count(self) -> int:
        return sum(1 for piece in self._squares if piece is not None)

    def find_king(self, player: Player) -> Position:
        """Return the square of *player*'s king."""
        for pos, piece in self.pieces(player):
            if piece.kind == PieceKind.KING:
                return pos
        raise AmbiguousStateError(f"No {player.name} king on board")

    # -- Mutation / copying -------------------------------------------------

    def move(self, from_pos: Position, to_pos: Position) -> Piece | None:
        """Relocate the piece on *from_pos*; return the previous occupant of *to_pos*."""
        captured = self._squares[to_pos.index]
        self._squares[to_pos.index] = self._squares[from_pos.index]
        self._squares[from_pos.index] = None
        return captured

    def toggle_player(self) -> None:
        self.current_player = self.current_player.opponent

    def clone(self) -> Board:
        # Pieces and moves are frozen value objects; copying the containers
        # is enough to make the copy fully independent.
        b = Board(self.current_player)
        b._squares = self._squares.copy()
        b._history = self._history.copy()
        return b

    def snapshot(self) -> BoardSnapshot:
        """Hashable structural key: pieces, player to move and history."""
        return (tuple(self._squares), self.current_player, tuple(self._history))

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position, White to move, empty history."""
        b = cls()
        for col, kind in enumerate(_BACK_RANK):
            b._squares[56 + col] = Piece(kind, Player.WHITE)
            b._squares[48 + col] = Piece(PieceKind.PAWN, Player.WHITE)
            b._squares[8 + col] = Piece(PieceKind.PAWN, Player.BLACK)
            b._squares[col] = Piece(kind, Player.BLACK)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._squares == other._squares
            and self.current_player == other.current_player
            and self._history == other._history
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self._squares[row * 8 + col]
                cells.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  A B C D E F G H")
        rows.append(f"{self.current_player} to move, {len(self._history)} plies")
        return "\n".join(rows)


def create_initial_board() -> Board:
    """Standard starting board; the only way besides ``apply_move`` to get one."""
    return Board.initial()
