"""Move value objects.

A move is one of five frozen variants; engine code dispatches on the
concrete class.  Equality is structural: board moves compare by their
endpoints (plus promotion target), never by identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeAlias

from gambit.core.enums import CastlingType, PieceKind, Player, SpecialMoveType
from gambit.core.piece import Piece
from gambit.core.position import (
    A1,
    A8,
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
    H1,
    H8,
    Position,
)

_KIND_LETTERS: dict[PieceKind, str] = {
    PieceKind.PAWN: "P",
    PieceKind.KNIGHT: "N",
    PieceKind.BISHOP: "B",
    PieceKind.ROOK: "R",
    PieceKind.QUEEN: "Q",
    PieceKind.KING: "K",
}

# (king_from, king_to, rook_from, rook_to)
_CASTLING_SQUARES: dict[
    tuple[Player, CastlingType], tuple[Position, Position, Position, Position]
] = {
    (Player.WHITE, CastlingType.LONG): (E1, C1, A1, D1),
    (Player.WHITE, CastlingType.SHORT): (E1, G1, H1, F1),
    (Player.BLACK, CastlingType.LONG): (E8, C8, A8, D8),
    (Player.BLACK, CastlingType.SHORT): (E8, G8, H8, F8),
}


def kind_letter(kind: PieceKind) -> str:
    """Upper-case letter of a piece kind, e.g. ``KNIGHT`` → ``'N'``."""
    return _KIND_LETTERS[kind]


@dataclass(frozen=True, slots=True)
class PlainMove:
    """Ordinary relocation of a piece, optionally capturing."""

    piece: Piece = field(compare=False)
    from_pos: Position
    to_pos: Position
    is_capture: bool = field(default=False, compare=False)

    @property
    def owner(self) -> Player:
        return self.piece.owner

    def __str__(self) -> str:
        sep = "x" if self.is_capture else ""
        return f"{kind_letter(self.piece.kind)}{self.from_pos}{sep}{self.to_pos}"


@dataclass(frozen=True, slots=True)
class PromotionMove:
    """Pawn reaching the far rank, replaced by *promote_to*."""

    owner: Player
    from_pos: Position
    to_pos: Position
    promote_to: PieceKind

    def __str__(self) -> str:
        return f"{self.from_pos}{self.to_pos}={kind_letter(self.promote_to)}"


@dataclass(frozen=True, slots=True)
class EnPassantMove:
    """Pawn capture whose victim stands beside, not on, the target square."""

    owner: Player
    from_pos: Position
    to_pos: Position
    capture_pos: Position

    def __str__(self) -> str:
        return f"{self.from_pos}x{self.to_pos}e.p."


@dataclass(frozen=True, slots=True)
class CastlingMove:
    """King and rook swap sides; squares are derived from the owner's colour."""

    owner: Player
    castling_type: CastlingType

    @property
    def from_pos(self) -> Position:
        return _CASTLING_SQUARES[(self.owner, self.castling_type)][0]

    @property
    def to_pos(self) -> Position:
        return _CASTLING_SQUARES[(self.owner, self.castling_type)][1]

    @property
    def rook_from(self) -> Position:
        return _CASTLING_SQUARES[(self.owner, self.castling_type)][2]

    @property
    def rook_to(self) -> Position:
        return _CASTLING_SQUARES[(self.owner, self.castling_type)][3]

    def __str__(self) -> str:
        return "O-O-O" if self.castling_type == CastlingType.LONG else "O-O"


@dataclass(frozen=True, slots=True)
class SpecialMove:
    """Protocol action (resign / draw offer / accept / decline)."""

    owner: Player
    message: SpecialMoveType

    def __str__(self) -> str:
        return self.message.name.lower()


BoardMove: TypeAlias = PlainMove | PromotionMove | EnPassantMove | CastlingMove
Move: TypeAlias = BoardMove | SpecialMove


def is_special(move: Move, message: SpecialMoveType | None = None) -> bool:
    """Whether *move* is a protocol move (of the given *message*, if any)."""
    if not isinstance(move, SpecialMove):
        return False
    return message is None or move.message == message


# ── JSON-compatible encoding ────────────────────────────────────────────────


def move_to_dict(move: Move) -> dict[str, Any]:
    """Encode *move* into plain JSON types, e.g. for persisting a history."""
    if isinstance(move, PlainMove):
        return {
            "type": "plain",
            "owner": move.owner.name,
            "piece": move.piece.kind.name,
            "from": str(move.from_pos),
            "to": str(move.to_pos),
            "capture": move.is_capture,
        }
    if isinstance(move, PromotionMove):
        return {
            "type": "promotion",
            "owner": move.owner.name,
            "from": str(move.from_pos),
            "to": str(move.to_pos),
            "promote_to": move.promote_to.name,
        }
    if isinstance(move, EnPassantMove):
        return {
            "type": "en_passant",
            "owner": move.owner.name,
            "from": str(move.from_pos),
            "to": str(move.to_pos),
            "capture": str(move.capture_pos),
        }
    if isinstance(move, CastlingMove):
        return {
            "type": "castling",
            "owner": move.owner.name,
            "castling": move.castling_type.name,
        }
    if isinstance(move, SpecialMove):
        return {
            "type": "special",
            "owner": move.owner.name,
            "message": move.message.name,
        }
    raise TypeError(f"Not a move: {move!r}")


def move_from_dict(data: dict[str, Any]) -> Move:
    """Decode the output of :func:`move_to_dict`."""
    try:
        kind = data["type"]
        owner = Player[data["owner"]]
        if kind == "plain":
            piece = Piece(PieceKind[data["piece"]], owner)
            return PlainMove(
                piece,
                Position.parse(data["from"]),
                Position.parse(data["to"]),
                bool(data.get("capture", False)),
            )
        if kind == "promotion":
            return PromotionMove(
                owner,
                Position.parse(data["from"]),
                Position.parse(data["to"]),
                PieceKind[data["promote_to"]],
            )
        if kind == "en_passant":
            return EnPassantMove(
                owner,
                Position.parse(data["from"]),
                Position.parse(data["to"]),
                Position.parse(data["capture"]),
            )
        if kind == "castling":
            return CastlingMove(owner, CastlingType[data["castling"]])
        if kind == "special":
            return SpecialMove(owner, SpecialMoveType[data["message"]])
    except KeyError as exc:
        raise ValueError(f"Invalid move payload {data!r}: missing {exc}") from None
    raise ValueError(f"Unknown move type: {kind!r}")

