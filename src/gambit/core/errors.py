"""Exception hierarchy raised by the rules engine and search strategies."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gambit.core.move import Move


class GambitError(Exception):
    """Base class for all errors raised by this package."""


class IllegalMoveError(GambitError, ValueError):
    """The move is not among the legal moves of the current board."""

    def __init__(self, move: Move | object, message: str | None = None) -> None:
        super().__init__(message or f"Illegal move: {move}")
        self.move = move


class OutOfRangeError(GambitError, ValueError):
    """A column or row lies outside the 8x8 board."""


class InvalidConfigurationError(GambitError, ValueError):
    """A search strategy was configured with an unusable value."""


class AmbiguousStateError(GambitError):
    """The board violates a structural invariant, e.g. a king is missing."""
