"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Player(IntEnum):
    """Side colour."""

    WHITE = 1
    BLACK = 2

    @property
    def opponent(self) -> Player:
        return Player.BLACK if self is Player.WHITE else Player.WHITE

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Chess piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class CastlingType(IntEnum):
    """Castling side: long (queen side) or short (king side)."""

    LONG = 1
    SHORT = 2


class SpecialMoveType(IntEnum):
    """Protocol actions recorded in history next to board moves."""

    RESIGN = 1
    DRAW_OFFER = 2
    DRAW_ACCEPT = 3
    DRAW_DECLINE = 4


class GameState(IntEnum):
    """Outcome of a game, derived from a board on demand."""

    IN_PROGRESS = 0
    WHITE_WON = 1
    BLACK_WON = 2
    DRAW = 3

    @classmethod
    def won_by(cls, player: Player) -> GameState:
        return cls.WHITE_WON if player is Player.WHITE else cls.BLACK_WON
