"""Position value object and coordinate helpers.

Board layout (flat index, row-major from the top):
    A8=0,  B8=1,  ..., H8=7
    A7=8,  B7=9,  ..., H7=15
    ...
    A1=56, B1=57, ..., H1=63
"""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.errors import OutOfRangeError

_COLUMNS = "ABCDEFGH"


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable square address in algebraic notation (column A-H, row 1-8)."""

    column: str
    row: int

    def __post_init__(self) -> None:
        if not isinstance(self.column, str) or len(self.column) != 1:
            raise OutOfRangeError(f"Invalid column: {self.column!r}")
        column = self.column.upper()
        if column not in _COLUMNS:
            raise OutOfRangeError(
                f"The column has to be between 'A' and 'H', got {self.column!r}"
            )
        if not isinstance(self.row, int) or isinstance(self.row, bool):
            raise OutOfRangeError(f"Invalid row: {self.row!r}")
        if not 1 <= self.row <= 8:
            raise OutOfRangeError(
                f"The row has to be between 1 and 8, got {self.row!r}"
            )
        object.__setattr__(self, "column", column)

    # ── Conversions ──────────────────────────────────────────────────────

    @classmethod
    def from_index(cls, index: int) -> Position:
        """Position for a flat index, 0 = A8 ... 63 = H1."""
        if not 0 <= index < 64:
            raise OutOfRangeError(f"Square index out of range: {index}")
        return ALL_POSITIONS[index]

    @classmethod
    def parse(cls, name: str) -> Position:
        """Parse algebraic notation, e.g. ``'B3'`` (case-insensitive)."""
        if len(name) != 2 or not name[1].isdigit():
            raise OutOfRangeError(f"Invalid square name: {name!r}")
        return cls(name[0], int(name[1]))

    @property
    def index(self) -> int:
        return (8 - self.row) * 8 + (ord(self.column) - ord("A"))

    @property
    def column_index(self) -> int:
        """Column as 0-7 (A-H)."""
        return ord(self.column) - ord("A")

    @property
    def is_dark_square(self) -> bool:
        return ((self.row - 1) + self.column_index) % 2 == 0

    # ── Neighbourhood ────────────────────────────────────────────────────

    def offset(self, d_col: int, d_row: int) -> Position | None:
        """Square shifted by (*d_col*, *d_row*), or ``None`` when off-board."""
        col = self.column_index + d_col
        row = self.row + d_row
        if 0 <= col < 8 and 1 <= row <= 8:
            return ALL_POSITIONS[(8 - row) * 8 + col]
        return None

    def north(self, n: int = 1) -> Position | None:
        return self.offset(0, n)

    def south(self, n: int = 1) -> Position | None:
        return self.offset(0, -n)

    def east(self, n: int = 1) -> Position | None:
        return self.offset(n, 0)

    def west(self, n: int = 1) -> Position | None:
        return self.offset(-n, 0)

    def north_east(self, n: int = 1) -> Position | None:
        return self.offset(n, n)

    def north_west(self, n: int = 1) -> Position | None:
        return self.offset(-n, n)

    def south_east(self, n: int = 1) -> Position | None:
        return self.offset(n, -n)

    def south_west(self, n: int = 1) -> Position | None:
        return self.offset(-n, -n)

    def __str__(self) -> str:
        return f"{self.column}{self.row}"


def _build_positions() -> tuple[Position, ...]:
    return tuple(
        Position(_COLUMNS[idx % 8], 8 - idx // 8) for idx in range(64)
    )


ALL_POSITIONS: tuple[Position, ...] = _build_positions()


def to_position(value: Position | str | int) -> Position:
    """Coerce an algebraic string or flat index into a :class:`Position`."""
    if isinstance(value, Position):
        return value
    if isinstance(value, str):
        return Position.parse(value)
    return Position.from_index(value)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ALL_POSITIONS[0:8]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_POSITIONS[8:16]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_POSITIONS[16:24]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_POSITIONS[24:32]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_POSITIONS[32:40]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_POSITIONS[40:48]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_POSITIONS[48:56]
A1, B1, C1, D1, E1, F1, G1, H1 = ALL_POSITIONS[56:64]
