"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from gambit.core.enums import PieceKind, Player

# FEN character ↔ (Player, PieceKind)
_CHAR_MAP: dict[str, tuple[Player, PieceKind]] = {
    "P": (Player.WHITE, PieceKind.PAWN),
    "N": (Player.WHITE, PieceKind.KNIGHT),
    "B": (Player.WHITE, PieceKind.BISHOP),
    "R": (Player.WHITE, PieceKind.ROOK),
    "Q": (Player.WHITE, PieceKind.QUEEN),
    "K": (Player.WHITE, PieceKind.KING),
    "p": (Player.BLACK, PieceKind.PAWN),
    "n": (Player.BLACK, PieceKind.KNIGHT),
    "b": (Player.BLACK, PieceKind.BISHOP),
    "r": (Player.BLACK, PieceKind.ROOK),
    "q": (Player.BLACK, PieceKind.QUEEN),
    "k": (Player.BLACK, PieceKind.KING),
}

_FEN_CHARS: dict[tuple[Player, PieceKind], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece.

    ``has_moved`` drives castling and pawn double-step eligibility;
    ``is_en_passant_capturable`` is only ever set on a pawn, for exactly
    one ply after its two-square advance.
    """

    kind: PieceKind
    owner: Player
    has_moved: bool = False
    is_en_passant_capturable: bool = False

    # ── Derived copies ───────────────────────────────────────────────────

    def with_moved(self) -> Piece:
        if self.has_moved:
            return self
        return replace(self, has_moved=True)

    def with_en_passant(self, capturable: bool) -> Piece:
        if self.kind != PieceKind.PAWN or self.is_en_passant_capturable == capturable:
            return self
        return replace(self, is_en_passant_capturable=capturable)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.owner, self.kind)]

    @classmethod
    def from_char(cls, char: str, has_moved: bool = False) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            owner, kind = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(kind, owner, has_moved)
